"""Delete a replica only when it holds nothing but replicated keys."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .context import ReplicationContext, bind
from .keys import current_keys

if TYPE_CHECKING:
    from replicator.domain.model import Replicable

    from .runtime import ReplicationRuntime

log = getLogger(__name__)


def delete_replicated_resource[TObject: Replicable](
    runtime: ReplicationRuntime[TObject],
    target: object,
) -> bool:
    """Delete ``target`` if its key set equals the recorded ``replicated-keys`` value.

    Only key names are compared. A value edited under a replicated key is not detected;
    a foreign key is, and blocks the deletion. Returns whether the object was deleted.
    """

    replica = runtime.expect(target)
    logger = bind(log, ReplicationContext(kind=runtime.kind_name, target=str(replica.key)))

    if current_keys(replica.data) != runtime.annotations.recorded_keys(replica.metadata):
        logger.info("not deleting %s since it contains other keys than replicated", replica.key)
        return False

    logger.debug("deleting %s", replica.key)
    runtime.call("delete", replica.metadata, lambda api: api.delete(replica.metadata.name))
    return True
