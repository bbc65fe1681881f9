"""Translate Kubernetes Secret payloads to and from domain objects."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping

from replicator.domain.model import ObjectMeta, Secret

from .schema import ObjectMetaPayload, SecretPayload

SecretPayloadInput = SecretPayload | Mapping[str, object]


def _decode(key: str, value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 value for data key {key!r}") from exc


def parse_secret(payload: SecretPayloadInput) -> Secret:
    model = payload if isinstance(payload, SecretPayload) else SecretPayload.model_validate(payload)
    meta = model.metadata
    return Secret(
        metadata=ObjectMeta(
            name=meta.name,
            namespace=meta.namespace or "",
            resource_version=meta.resource_version,
            annotations=dict(meta.annotations or {}),
            labels=dict(meta.labels or {}),
            extra=dict(meta.model_extra or {}),
        ),
        data={key: _decode(key, value) for key, value in (model.data or {}).items()},
        type=model.type,
        extra=dict(model.model_extra or {}),
    )


def build_secret_payload(secret: Secret) -> SecretPayload:
    meta = secret.metadata
    metadata = ObjectMetaPayload(
        name=meta.name,
        namespace=meta.namespace or None,
        resource_version=meta.resource_version,
        annotations=dict(meta.annotations) or None,
        labels=dict(meta.labels) or None,
        **meta.extra,
    )
    data = {key: base64.b64encode(value).decode("ascii") for key, value in secret.data.items()}
    return SecretPayload(
        metadata=metadata,
        data=data or None,
        type=secret.type,
        **secret.extra,
    )


def serialize_secret(secret: Secret) -> dict[str, object]:
    return build_secret_payload(secret).model_dump(by_alias=True, exclude_none=True)
