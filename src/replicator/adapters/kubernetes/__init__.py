"""Public interface for the Kubernetes adapter."""

from __future__ import annotations

from .client import KubernetesAPIError, KubernetesSecretsClient, secrets_api_factory
from .schema import ObjectMetaPayload, SecretPayload, StatusPayload
from .translator import parse_secret, serialize_secret

__all__ = [
    "KubernetesAPIError",
    "KubernetesSecretsClient",
    "ObjectMetaPayload",
    "SecretPayload",
    "StatusPayload",
    "parse_secret",
    "secrets_api_factory",
    "serialize_secret",
]
