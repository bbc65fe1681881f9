"""Port for the replication admission decision."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from replicator.domain.model import ObjectMeta


@dataclass(frozen=True, slots=True)
class PermissionDecision:
    allowed: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.allowed


@runtime_checkable
class PermissionGate(Protocol):
    """Decides whether ``source_meta`` may be replicated into ``target_meta``."""

    def is_permitted(self, target_meta: ObjectMeta, source_meta: ObjectMeta) -> PermissionDecision:
        ...
