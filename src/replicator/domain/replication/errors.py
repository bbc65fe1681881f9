"""Errors raised by the replication operations."""

from __future__ import annotations


class ReplicationError(RuntimeError):
    """Base class for failures of a replication operation."""


class ReplicationNotPermittedError(ReplicationError):
    """The source does not allow replication into the target; nothing was written."""

    def __init__(self, message: str, *, source: str, target: str) -> None:
        super().__init__(message)
        self.source = source
        self.target = target


class ObjectNotFoundError(ReplicationError):
    """An object required by the operation does not exist."""


class ObjectTypeError(ReplicationError):
    """The cache handed back an object of an unexpected kind."""


class CacheLookupError(ReplicationError):
    """Reading the object cache failed."""


class ReplicationTransportError(ReplicationError):
    """A create, update, patch or delete call against the API failed."""

    def __init__(self, message: str, *, operation: str, target: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.target = target


class CacheSyncError(ReplicationError):
    """The remote write succeeded but refreshing the local cache failed."""

    def __init__(self, message: str, *, target: str) -> None:
        super().__init__(message)
        self.target = target
