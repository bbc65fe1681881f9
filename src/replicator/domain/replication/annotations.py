"""Replication-owned annotations and the ownership record they encode.

Annotations are the only durable record of what replication wrote into a target.
They are parsed into typed values here and nowhere else; the operations work with
:class:`OwnedKeys` and plain version strings.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from replicator.config.replication import DEFAULT_ANNOTATION_PREFIX

if TYPE_CHECKING:
    from replicator.domain.model import ObjectMeta

KEY_SEPARATOR = ","
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class OwnedKeys(frozenset[str]):
    """Set of data keys replication wrote into a target."""

    @classmethod
    def parse(cls, value: str) -> OwnedKeys:
        return cls(key for key in value.split(KEY_SEPARATOR) if key)

    @classmethod
    def of(cls, keys: Iterable[str]) -> OwnedKeys:
        return cls(keys)

    def serialize(self) -> str:
        return KEY_SEPARATOR.join(sorted(self))


def format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True, slots=True)
class ReplicationAnnotations:
    """Concrete annotation names under one prefix."""

    prefix: str = DEFAULT_ANNOTATION_PREFIX

    def _name(self, suffix: str) -> str:
        return f"{self.prefix}/{suffix}"

    @property
    def replicated_at(self) -> str:
        return self._name("replicated-at")

    @property
    def replicated_from_version(self) -> str:
        return self._name("replicated-from-version")

    @property
    def replicated_keys(self) -> str:
        return self._name("replicated-keys")

    @property
    def previously_present_keys(self) -> str:
        return self._name("previously-present-keys")

    @property
    def replication_allowed(self) -> str:
        return self._name("replication-allowed")

    @property
    def replication_allowed_namespaces(self) -> str:
        return self._name("replication-allowed-namespaces")

    def source_version(self, meta: ObjectMeta) -> str | None:
        """Source resource version the target's data was last produced from."""

        return meta.annotations.get(self.replicated_from_version)

    def is_up_to_date(self, target: ObjectMeta, source: ObjectMeta) -> bool:
        recorded = self.source_version(target)
        return recorded is not None and recorded == (source.resource_version or "")

    def previously_owned(self, meta: ObjectMeta) -> OwnedKeys | None:
        """Keys replication owned before this round, or ``None`` if nothing was recorded.

        ``replicated-keys`` is authoritative; the ``previously-present-keys`` marker is
        only consulted for targets that never received a ``replicated-keys`` record.
        """

        recorded = meta.annotations.get(self.replicated_keys)
        if recorded is None:
            recorded = meta.annotations.get(self.previously_present_keys)
        if recorded is None:
            return None
        return OwnedKeys.parse(recorded)

    def recorded_keys(self, meta: ObjectMeta) -> str:
        """Raw ``replicated-keys`` value, ``""`` when absent."""

        return meta.annotations.get(self.replicated_keys, "")

    def stamp(
        self,
        meta: ObjectMeta,
        *,
        source_version: str | None,
        owned: OwnedKeys,
        at: datetime,
    ) -> None:
        meta.annotations[self.replicated_at] = format_timestamp(at)
        meta.annotations[self.replicated_from_version] = source_version or ""
        meta.annotations[self.replicated_keys] = owned.serialize()
