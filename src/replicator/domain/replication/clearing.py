"""Strip the data payload from a dependent target."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from replicator.domain.ports import JSONPatchOperation

from .context import ReplicationContext, bind

if TYPE_CHECKING:
    from replicator.domain.model import Replicable

    from .runtime import ReplicationRuntime

log = getLogger(__name__)

CLEAR_DATA_PATCH = (JSONPatchOperation(op="remove", path="/data"),)


def patch_delete_dependent[TObject: Replicable](
    runtime: ReplicationRuntime[TObject],
    source_key: str,
    target: object,
) -> TObject:
    """Remove ``data`` from ``target`` with a JSON patch and return the patched object.

    Annotations and every other field stay as they are, and the cache is left to the
    caller.
    """

    dependent = runtime.expect(target)
    logger = bind(
        log,
        ReplicationContext(kind=runtime.kind_name, source=source_key, target=str(dependent.key)),
    )

    logger.debug("clearing dependent %s %s", runtime.kind_name, dependent.key)
    return runtime.call(
        "patch",
        dependent.metadata,
        lambda api: api.patch(dependent.metadata.name, CLEAR_DATA_PATCH),
    )
