"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ObjectKind(StrEnum):
    """Discriminator for the concrete replicable resource kinds."""

    SECRET = "Secret"
