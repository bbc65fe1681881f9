"""Annotation-driven replication permission gate."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from replicator.domain.ports import PermissionDecision

from .annotations import ReplicationAnnotations

if TYPE_CHECKING:
    from replicator.domain.model import ObjectMeta

log = getLogger(__name__)

# strconv.ParseBool spellings, kept so annotations written for other tooling still parse
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def namespace_matches(pattern: str, namespace: str) -> bool:
    """Whole-string match of ``namespace`` against a name or regular expression."""

    try:
        return re.fullmatch(pattern, namespace) is not None
    except re.error:
        return pattern == namespace


@dataclass(frozen=True, slots=True)
class AnnotationPermissionGate:
    """Permits replication only where the source opted in via its annotations."""

    annotations: ReplicationAnnotations = field(default_factory=ReplicationAnnotations)
    allow_all: bool = False

    def is_permitted(self, target_meta: ObjectMeta, source_meta: ObjectMeta) -> PermissionDecision:
        if self.allow_all:
            return PermissionDecision(allowed=True)

        source_key = str(source_meta.key)
        allowed_value = source_meta.annotations.get(self.annotations.replication_allowed)
        if allowed_value is None:
            return PermissionDecision(
                allowed=False,
                reason=f"source {source_key} does not explicitly allow replication",
            )
        try:
            allowed = parse_bool(allowed_value)
        except ValueError:
            return PermissionDecision(
                allowed=False,
                reason=(
                    f"source {source_key} has illegal annotation value "
                    f"{self.annotations.replication_allowed}={allowed_value!r}"
                ),
            )
        if not allowed:
            return PermissionDecision(
                allowed=False,
                reason=f"source {source_key} explicitly disallows replication",
            )

        patterns = source_meta.annotations.get(self.annotations.replication_allowed_namespaces)
        if patterns is None:
            return PermissionDecision(
                allowed=False,
                reason=f"source {source_key} does not allow replication to any namespace",
            )
        for pattern in (entry.strip() for entry in patterns.split(",")):
            if pattern and namespace_matches(pattern, target_meta.namespace):
                log.debug("namespace %s matches %r on %s", target_meta.namespace, pattern, source_key)
                return PermissionDecision(allowed=True)

        return PermissionDecision(
            allowed=False,
            reason=(
                f"source {source_key} does not allow replication to namespace "
                f"{target_meta.namespace}"
            ),
        )
