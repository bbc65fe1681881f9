"""Collaborators shared by the replication operations."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from replicator.domain.ports import ObjectAPIError, StoreError

from .annotations import ReplicationAnnotations
from .errors import (
    CacheLookupError,
    CacheSyncError,
    ObjectTypeError,
    ReplicationNotPermittedError,
    ReplicationTransportError,
)
from .keys import merge_data

if TYPE_CHECKING:
    from replicator.domain.model import ObjectMeta, Replicable
    from replicator.domain.ports import ObjectAPI, ObjectAPIFactory, ObjectStore, PermissionGate

    from .context import ReplicationLogger


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ReplicationRuntime[TObject: Replicable]:
    """Everything an operation needs besides the objects it is handed."""

    kind: type[TObject]
    store: ObjectStore
    api: ObjectAPIFactory[TObject]
    permissions: PermissionGate
    annotations: ReplicationAnnotations = field(default_factory=ReplicationAnnotations)
    clock: Callable[[], datetime] = _utcnow

    @property
    def kind_name(self) -> str:
        return str(self.kind.KIND)

    def expect(self, obj: object) -> TObject:
        if not isinstance(obj, self.kind):
            raise ObjectTypeError(
                f"bad type returned from Store: expected {self.kind_name}, "
                f"got {type(obj).__name__}"
            )
        return obj

    def lookup(self, key: str) -> TObject | None:
        try:
            cached = self.store.get(key)
        except StoreError as exc:
            raise CacheLookupError(f"could not get {key} from cache: {exc}") from exc
        if cached is None:
            return None
        return self.expect(cached)

    def ensure_permitted(self, target: ObjectMeta, source: ObjectMeta) -> None:
        decision = self.permissions.is_permitted(target, source)
        if decision.allowed:
            return
        source_key, target_key = str(source.key), str(target.key)
        detail = f": {decision.reason}" if decision.reason else ""
        raise ReplicationNotPermittedError(
            f"replication of {source_key} to {target_key} is not permitted{detail}",
            source=source_key,
            target=target_key,
        )

    def apply_source(self, base: TObject, source: TObject, logger: ReplicationLogger) -> None:
        """Fold ``source`` data into ``base`` and stamp the replication annotations."""

        merge = merge_data(
            source.data,
            base.data,
            self.annotations.previously_owned(base.metadata),
        )
        for key in merge.removed:
            logger.debug("removing previously present key %s: not present in source any more", key)
        base.data = merge.data
        self.annotations.stamp(
            base.metadata,
            source_version=source.metadata.resource_version,
            owned=merge.replicated,
            at=self.clock(),
        )

    def call[TResult](
        self,
        operation: str,
        target: ObjectMeta,
        request: Callable[[ObjectAPI[TObject]], TResult],
    ) -> TResult:
        """Run ``request`` against the target namespace, wrapping API failures."""

        target_key = str(target.key)
        try:
            return request(self.api(target.namespace))
        except ObjectAPIError as exc:
            raise ReplicationTransportError(
                f"failed to {operation} {self.kind_name} {target_key}: {exc}",
                operation=operation,
                target=target_key,
            ) from exc

    def refresh_cache(self, written: TObject) -> None:
        """Mirror a server-returned object into the cache."""

        try:
            self.store.put(written)
        except StoreError as exc:
            raise CacheSyncError(
                f"failed to update cache for {written.key}: {exc}",
                target=str(written.key),
            ) from exc
