"""
Replicable objects:
identity, metadata and the data payload replication copies around.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Protocol, Self

from .enums import ObjectKind

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class ObjectKey:
    """Namespaced identity; renders as the ``namespace/name`` store key."""

    namespace: str
    name: str

    @classmethod
    def parse(cls, value: str) -> ObjectKey:
        namespace, sep, name = value.partition("/")
        if not sep or not namespace or not name or "/" in name:
            raise ValueError(f"Invalid object key (expected namespace/name): {value!r}")
        return cls(namespace=namespace, name=name)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(kw_only=True, slots=True)
class ObjectMeta:
    name: str
    namespace: str = ""
    resource_version: str | None = None
    annotations: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    # metadata fields this service never interprets (uid, ownerReferences, ...)
    extra: dict[str, object] = field(default_factory=dict)

    @property
    def key(self) -> ObjectKey:
        return ObjectKey(namespace=self.namespace, name=self.name)


class Replicable(Protocol):
    """Structural contract shared by every kind the replication core handles."""

    KIND: ClassVar[ObjectKind]

    metadata: ObjectMeta
    data: dict[str, bytes]

    @property
    def variant(self) -> str | None: ...

    @variant.setter
    def variant(self, value: str | None) -> None: ...

    @property
    def key(self) -> ObjectKey: ...

    @classmethod
    def blank(cls) -> Self: ...

    def clone(self) -> Self: ...


@dataclass(kw_only=True, slots=True)
class Secret:
    """A namespaced map of binary values, the only kind replicated today."""

    KIND: ClassVar[ObjectKind] = ObjectKind.SECRET

    metadata: ObjectMeta
    data: dict[str, bytes] = field(default_factory=dict)
    type: str | None = None
    extra: dict[str, object] = field(default_factory=dict)

    @property
    def variant(self) -> str | None:
        return self.type

    @variant.setter
    def variant(self, value: str | None) -> None:
        self.type = value

    @property
    def key(self) -> ObjectKey:
        return self.metadata.key

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations

    @classmethod
    def blank(cls) -> Secret:
        return cls(metadata=ObjectMeta(name=""))

    @classmethod
    def build(
        cls,
        *,
        namespace: str,
        name: str,
        data: Mapping[str, bytes] | None = None,
        annotations: Mapping[str, str] | None = None,
        resource_version: str | None = None,
        type: str | None = None,  # noqa: A002
    ) -> Secret:
        return cls(
            metadata=ObjectMeta(
                name=name,
                namespace=namespace,
                resource_version=resource_version,
                annotations=dict(annotations or {}),
            ),
            data=dict(data or {}),
            type=type,
        )

    def clone(self) -> Secret:
        return copy.deepcopy(self)
