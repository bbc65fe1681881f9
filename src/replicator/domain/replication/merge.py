"""In-place data merge into an existing target."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .context import ReplicationContext, bind

if TYPE_CHECKING:
    from replicator.domain.model import Replicable

    from .runtime import ReplicationRuntime

log = getLogger(__name__)


def replicate_data_from[TObject: Replicable](
    runtime: ReplicationRuntime[TObject],
    source: TObject,
    target: TObject,
) -> bool:
    """Make ``target.data`` mirror ``source.data`` and persist it.

    Keys the target held because of an earlier replication round and that the source
    no longer has are removed; foreign keys are kept. Returns ``False`` without writing
    when the target already reflects the source's current resource version.
    """

    logger = bind(
        log,
        ReplicationContext(kind=runtime.kind_name, source=str(source.key), target=str(target.key)),
    )

    runtime.ensure_permitted(target.metadata, source.metadata)

    if runtime.annotations.is_up_to_date(target.metadata, source.metadata):
        logger.debug("target %s is already up-to-date", target.key)
        return False

    updated = target.clone()
    runtime.apply_source(updated, source, logger)

    logger.info("updating target %s", target.key)
    written = runtime.call("update", updated.metadata, lambda api: api.update(updated))
    runtime.refresh_cache(written)
    return True
