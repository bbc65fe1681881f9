"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from replicator.adapters.kubernetes import secrets_api_factory
from replicator.adapters.memory_store import InMemoryObjectStore
from replicator.config import get_kubernetes_config, get_replication_config
from replicator.domain.model import ObjectKey
from replicator.domain.ports import ObjectAPIError
from replicator.domain.replication import (
    AnnotationPermissionGate,
    ObjectNotFoundError,
    ReplicationAnnotations,
    ReplicationTransportError,
    build_secret_replicator,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from replicator.adapters.http_resilience import ResilientClient
    from replicator.config import KubernetesConfig, ReplicationConfig, ResilienceConfig
    from replicator.domain.model import Secret
    from replicator.domain.ports import ObjectAPIFactory
    from replicator.domain.replication import SecretReplicator


log = getLogger(__name__)


@dataclass(slots=True)
class ProjectionSummary:
    """Outcome of projecting one source into several namespaces."""

    written: list[str] = field(default_factory=list)
    up_to_date: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ReplicationService:
    """One-shot replication commands over live cluster state.

    There is no informer here: every command reads the objects it needs through the
    API and mirrors them into the store before calling the replicator, which gives
    the operations the same view a watch-fed cache would.
    """

    replicator: SecretReplicator
    api: ObjectAPIFactory[Secret]
    store: InMemoryObjectStore

    def fetch(self, key: ObjectKey) -> Secret | None:
        try:
            secret = self.api(key.namespace).get(key.name)
        except ObjectAPIError as exc:
            raise ReplicationTransportError(
                f"failed to get Secret {key}: {exc}", operation="get", target=str(key)
            ) from exc
        if secret is None:
            self.store.discard(str(key))
            return None
        self.store.put(secret)
        return secret

    def require(self, key: ObjectKey) -> Secret:
        secret = self.fetch(key)
        if secret is None:
            raise ObjectNotFoundError(f"Secret {key} not found")
        return secret

    def replicate_to(self, source_key: ObjectKey, namespaces: Sequence[str]) -> ProjectionSummary:
        source = self.require(source_key)
        summary = ProjectionSummary()
        for namespace in namespaces:
            target_key = ObjectKey(namespace=namespace, name=source_key.name)
            self.fetch(target_key)
            target = str(target_key)
            if self.replicator.replicate_object_to(source, namespace):
                summary.written.append(target)
            else:
                summary.up_to_date.append(target)
        log.info(
            "Projected %s: written=%s, up_to_date=%s",
            source_key,
            len(summary.written),
            len(summary.up_to_date),
        )
        return summary

    def sync(self, source_key: ObjectKey, target_key: ObjectKey) -> bool:
        source = self.require(source_key)
        target = self.require(target_key)
        return self.replicator.replicate_data_from(source, target)

    def clear(self, source_key: ObjectKey, target_key: ObjectKey) -> Secret:
        target = self.require(target_key)
        cleared = self.replicator.patch_delete_dependent(str(source_key), target)
        self.store.put(cleared)
        return cleared

    def delete(self, target_key: ObjectKey) -> bool:
        target = self.require(target_key)
        deleted = self.replicator.delete_replicated_resource(target)
        if deleted:
            self.store.discard(str(target_key))
        return deleted


def build_replication_service(
    *,
    kubernetes: KubernetesConfig | None = None,
    replication: ReplicationConfig | None = None,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    store: InMemoryObjectStore | None = None,
) -> ReplicationService:
    """Wire the Kubernetes adapter, cache and permission gate from configuration."""

    effective_kubernetes = kubernetes or get_kubernetes_config()
    effective_replication = replication or get_replication_config()
    annotations = ReplicationAnnotations(prefix=effective_replication.annotation_prefix)
    effective_store = store if store is not None else InMemoryObjectStore()
    api = secrets_api_factory(effective_kubernetes, client_factory=client_factory)

    log.debug(
        "Building replication service: api=%s, allow_all=%s, prefix=%s",
        effective_kubernetes.api_url,
        effective_replication.allow_all,
        annotations.prefix,
    )
    replicator = build_secret_replicator(
        store=effective_store,
        api=api,
        permissions=AnnotationPermissionGate(
            annotations=annotations,
            allow_all=effective_replication.allow_all,
        ),
        annotations=annotations,
    )
    return ReplicationService(replicator=replicator, api=api, store=effective_store)
