"""Process-local object cache."""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING

from replicator.domain.ports import ObjectStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from replicator.domain.model import Replicable

log = getLogger(__name__)


class InMemoryObjectStore(ObjectStore):
    """Dict-backed mirror keyed by ``namespace/name``; ``put`` replaces wholesale."""

    def __init__(self, objects: Iterable[Replicable] = ()) -> None:
        self._lock = threading.Lock()
        self._objects: dict[str, object] = {}
        for obj in objects:
            self.put(obj)

    def get(self, key: str) -> object | None:
        with self._lock:
            return self._objects.get(key)

    def put(self, obj: Replicable) -> None:
        key = str(obj.key)
        with self._lock:
            self._objects[key] = obj
        log.debug("cached %s %s at version %s", obj.KIND, key, obj.metadata.resource_version)

    def discard(self, key: str) -> None:
        with self._lock:
            self._objects.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._objects)

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)
