"""Port for the process-local object cache."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from replicator.domain.model import Replicable


class StoreError(RuntimeError):
    """Raised by store implementations when a read or write cannot be served."""


@runtime_checkable
class ObjectStore(Protocol):
    """Key-value mirror of cluster objects, keyed by ``namespace/name``.

    ``get`` returns whatever object the cache holds for the key, or ``None`` when the
    key is unknown. Callers must check the returned type themselves: the cache is
    shared across kinds and may hold stale or foreign entries.
    """

    def get(self, key: str) -> object | None: ...

    def put(self, obj: Replicable) -> None: ...
