"""Create-or-update projection of a source into a destination namespace."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from replicator.domain.model import ObjectKey

from .context import ReplicationContext, bind

if TYPE_CHECKING:
    from replicator.domain.model import Replicable

    from .runtime import ReplicationRuntime

log = getLogger(__name__)


def replicate_object_to[TObject: Replicable](
    runtime: ReplicationRuntime[TObject],
    source: TObject,
    namespace: str,
) -> bool:
    """Ensure ``namespace`` holds a copy of ``source`` under the source's name.

    The cache decides between the two API verbs: an object already mirrored there is
    cloned and updated (keeping its own type), otherwise a fresh object is created.
    Returns ``False`` when the existing copy is already at the source's version.
    """

    target_key = ObjectKey(namespace=namespace, name=source.metadata.name)
    logger = bind(
        log,
        ReplicationContext(kind=runtime.kind_name, source=str(source.key), target=str(target_key)),
    )

    existing = runtime.lookup(str(target_key))
    logger.info("checking if %s exists? %s", target_key, existing is not None)

    if existing is not None:
        if runtime.annotations.is_up_to_date(existing.metadata, source.metadata):
            logger.debug("%s %s is already up-to-date", runtime.kind_name, target_key)
            return False
        projected = existing.clone()
    else:
        projected = runtime.kind.blank()

    runtime.apply_source(projected, source, logger)
    projected.metadata.name = target_key.name
    projected.metadata.namespace = target_key.namespace
    if projected.variant is None:
        projected.variant = source.variant

    if existing is not None:
        logger.debug("updating existing %s %s", runtime.kind_name, target_key)
        written = runtime.call("update", projected.metadata, lambda api: api.update(projected))
    else:
        logger.debug("creating a new %s %s", runtime.kind_name, target_key)
        written = runtime.call("create", projected.metadata, lambda api: api.create(projected))

    runtime.refresh_cache(written)
    return True
