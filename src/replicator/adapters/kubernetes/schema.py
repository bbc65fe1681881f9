"""Pydantic models describing the Kubernetes API payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SecretKind = Literal["Secret"]


class KubernetesBaseModel(BaseModel):
    # unknown fields (uid, ownerReferences, immutable, ...) must survive a read-modify-write
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ObjectMetaPayload(KubernetesBaseModel):
    name: str
    namespace: str | None = None
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    annotations: dict[str, str] | None = None
    labels: dict[str, str] | None = None


class SecretPayload(KubernetesBaseModel):
    api_version: str = Field(default="v1", alias="apiVersion")
    kind: SecretKind = "Secret"
    metadata: ObjectMetaPayload
    data: dict[str, str] | None = None
    type: str | None = None


class StatusPayload(KubernetesBaseModel):
    kind: Literal["Status"] = "Status"
    status: str | None = None
    message: str | None = None
    reason: str | None = None
    code: int | None = None
