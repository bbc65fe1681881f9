"""Replication behaviour switches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_flag, optional_env_var
from .errors import ConfigurationError

DEFAULT_ANNOTATION_PREFIX: Final[str] = "replicator.v1.mittwald.de"


@dataclass(frozen=True, slots=True)
class ReplicationConfig:
    allow_all: bool = False
    annotation_prefix: str = DEFAULT_ANNOTATION_PREFIX


def get_replication_config() -> ReplicationConfig:
    prefix = optional_env_var("REPLICATOR_ANNOTATION_PREFIX") or DEFAULT_ANNOTATION_PREFIX
    prefix = prefix.rstrip("/")
    if not prefix or "/" in prefix:
        raise ConfigurationError(f"Invalid annotation prefix: {prefix!r}")
    return ReplicationConfig(
        allow_all=env_flag("REPLICATOR_ALLOW_ALL"),
        annotation_prefix=prefix,
    )
