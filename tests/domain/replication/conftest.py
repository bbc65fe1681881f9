from __future__ import annotations

import pytest

from replicator.adapters.memory_store import InMemoryObjectStore
from replicator.domain.model import Secret
from replicator.domain.replication import (
    ReplicationAnnotations,
    Replicator,
    build_secret_replicator,
)
from tests.support.cluster import FIXED_NOW, FakeCluster, StaticPermissionGate


@pytest.fixture
def cluster() -> FakeCluster:
    return FakeCluster()


@pytest.fixture
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def gate() -> StaticPermissionGate:
    return StaticPermissionGate()


@pytest.fixture
def names() -> ReplicationAnnotations:
    return ReplicationAnnotations()


@pytest.fixture
def replicator(
    cluster: FakeCluster,
    store: InMemoryObjectStore,
    gate: StaticPermissionGate,
) -> Replicator[Secret]:
    return build_secret_replicator(
        store=store,
        api=cluster.api,
        permissions=gate,
        clock=lambda: FIXED_NOW,
    )
