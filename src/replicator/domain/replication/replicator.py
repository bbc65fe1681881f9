"""Facade bundling the four replication operations for one object kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from replicator.domain.model import Secret

from .clearing import patch_delete_dependent
from .deletion import delete_replicated_resource
from .merge import replicate_data_from
from .projection import replicate_object_to
from .runtime import ReplicationRuntime

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from replicator.domain.model import Replicable
    from replicator.domain.ports import ObjectAPIFactory, ObjectStore, PermissionGate

    from .annotations import ReplicationAnnotations


@dataclass(slots=True)
class Replicator[TObject: Replicable]:
    """Entry points a dispatcher calls once it has decided what a target needs.

    Source and target arrive untyped from the event channel and are checked against
    the replicator's kind once, here.
    """

    runtime: ReplicationRuntime[TObject]

    @property
    def kind_name(self) -> str:
        return self.runtime.kind_name

    def replicate_data_from(self, source: object, target: object) -> bool:
        return replicate_data_from(
            self.runtime, self.runtime.expect(source), self.runtime.expect(target)
        )

    def replicate_object_to(self, source: object, namespace: str) -> bool:
        return replicate_object_to(self.runtime, self.runtime.expect(source), namespace)

    def patch_delete_dependent(self, source_key: str, target: object) -> TObject:
        return patch_delete_dependent(self.runtime, source_key, target)

    def delete_replicated_resource(self, target: object) -> bool:
        return delete_replicated_resource(self.runtime, target)


type SecretReplicator = Replicator[Secret]


def build_secret_replicator(
    *,
    store: ObjectStore,
    api: ObjectAPIFactory[Secret],
    permissions: PermissionGate,
    annotations: ReplicationAnnotations | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Replicator[Secret]:
    runtime = ReplicationRuntime(kind=Secret, store=store, api=api, permissions=permissions)
    if annotations is not None:
        runtime.annotations = annotations
    if clock is not None:
        runtime.clock = clock
    return Replicator(runtime=runtime)
