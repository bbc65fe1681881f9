"""Domain port definitions for adapters."""

from __future__ import annotations

from .permission import PermissionDecision, PermissionGate
from .remote import JSONPatchOperation, ObjectAPI, ObjectAPIError, ObjectAPIFactory
from .store import ObjectStore, StoreError

__all__ = [
    "JSONPatchOperation",
    "ObjectAPI",
    "ObjectAPIError",
    "ObjectAPIFactory",
    "ObjectStore",
    "PermissionDecision",
    "PermissionGate",
    "StoreError",
]
