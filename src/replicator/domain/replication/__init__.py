"""Synchronization core for replicated objects.

Four operations, each safe to repeat for the same source version:
1) merge source data into an existing target (``merge``)
2) create or update a target from a source (``projection``)
3) strip the data payload from a dependent target (``clearing``)
4) delete a target that holds only replicated keys (``deletion``)

Which operation a target needs is decided by the caller.
"""

from __future__ import annotations

from .annotations import OwnedKeys, ReplicationAnnotations
from .errors import (
    CacheLookupError,
    CacheSyncError,
    ObjectNotFoundError,
    ObjectTypeError,
    ReplicationError,
    ReplicationNotPermittedError,
    ReplicationTransportError,
)
from .permissions import AnnotationPermissionGate
from .replicator import Replicator, SecretReplicator, build_secret_replicator
from .runtime import ReplicationRuntime

__all__ = [
    "AnnotationPermissionGate",
    "CacheLookupError",
    "CacheSyncError",
    "ObjectNotFoundError",
    "ObjectTypeError",
    "OwnedKeys",
    "ReplicationAnnotations",
    "ReplicationError",
    "ReplicationNotPermittedError",
    "ReplicationRuntime",
    "ReplicationTransportError",
    "Replicator",
    "SecretReplicator",
    "build_secret_replicator",
]
