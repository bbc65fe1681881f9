"""Key-level diff between a source payload and a target payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .annotations import OwnedKeys

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class DataMerge:
    """Result of folding a source payload into a target payload."""

    data: dict[str, bytes]
    replicated: OwnedKeys
    removed: tuple[str, ...]


def merge_data(
    source: Mapping[str, bytes],
    target: Mapping[str, bytes],
    previously_owned: OwnedKeys | None,
) -> DataMerge:
    """Copy every source entry over ``target`` and drop keys replication no longer owns.

    Only keys in ``previously_owned`` can be removed; anything else already present in
    ``target`` is foreign and survives untouched. ``target`` itself is not modified.
    """

    merged = dict(target)
    for key, value in source.items():
        merged[key] = bytes(value)

    removed: tuple[str, ...] = ()
    if previously_owned is not None:
        removed = tuple(sorted(previously_owned.difference(source)))
        for key in removed:
            merged.pop(key, None)

    return DataMerge(data=merged, replicated=OwnedKeys.of(source), removed=removed)


def current_keys(data: Mapping[str, bytes]) -> str:
    """Sorted, comma-joined key list of ``data`` in ``replicated-keys`` form."""

    return OwnedKeys.of(data).serialize()
