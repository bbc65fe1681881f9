"""Per-operation logging context."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ReplicationContext:
    """Fields attached to every log record an operation emits."""

    kind: str
    target: str
    source: str | None = None

    def fields(self) -> dict[str, str]:
        fields = {"kind": self.kind}
        if self.source is not None:
            fields["source"] = self.source
        fields["target"] = self.target
        return fields


class ReplicationLogger(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Prefixes messages with ``key=value`` fields and exposes them as record extras."""

    def __init__(self, logger: logging.Logger, context: ReplicationContext) -> None:
        super().__init__(logger, context.fields())
        self.context = context

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        fields = dict(self.extra or {})
        prefix = " ".join(f"{name}={value}" for name, value in fields.items())
        extra = kwargs.get("extra") or {}
        kwargs["extra"] = {**fields, **extra}
        return f"[{prefix}] {msg}", kwargs


def bind(logger: logging.Logger, context: ReplicationContext) -> ReplicationLogger:
    return ReplicationLogger(logger, context)
