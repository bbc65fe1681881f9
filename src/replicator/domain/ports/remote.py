"""Ports for writing objects to the cluster API."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from replicator.domain.model import Replicable

PatchOp = Literal["add", "remove", "replace", "move", "copy", "test"]


class ObjectAPIError(RuntimeError):
    """Raised by API adapters when a request fails or is rejected."""

    def __init__(self, message: str, *, code: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.reason = reason

    @property
    def is_not_found(self) -> bool:
        return self.code == 404


@dataclass(frozen=True, slots=True)
class JSONPatchOperation:
    """Single RFC 6902 operation."""

    op: PatchOp
    path: str
    value: object = None

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"op": self.op, "path": self.path}
        if self.op in {"add", "replace", "test"}:
            payload["value"] = self.value
        return payload


@runtime_checkable
class ObjectAPI[TObject: Replicable](Protocol):
    """Namespace-scoped API for one object kind."""

    namespace: str

    def get(self, name: str) -> TObject | None: ...

    def create(self, obj: TObject) -> TObject: ...

    def update(self, obj: TObject) -> TObject: ...

    def patch(self, name: str, operations: Sequence[JSONPatchOperation]) -> TObject: ...

    def delete(self, name: str) -> None: ...


type ObjectAPIFactory[TObject: Replicable] = Callable[[str], ObjectAPI[TObject]]
