"""Domain model for replicated resources."""

from __future__ import annotations

from .enums import ObjectKind
from .objects import ObjectKey, ObjectMeta, Replicable, Secret

__all__ = [
    "ObjectKey",
    "ObjectKind",
    "ObjectMeta",
    "Replicable",
    "Secret",
]
