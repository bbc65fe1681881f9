"""HTTP client for the Kubernetes Secrets API."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from replicator.adapters.http_resilience import ResilientClient
from replicator.domain.ports import ObjectAPIError

from .schema import StatusPayload
from .translator import parse_secret, serialize_secret

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from replicator.config.http_resilience import ResilienceConfig
    from replicator.config.kubernetes import KubernetesConfig
    from replicator.domain.model import Secret
    from replicator.domain.ports import JSONPatchOperation

log = getLogger(__name__)

JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"


class KubernetesAPIError(ObjectAPIError):
    """Raised when the Kubernetes API rejects a request or cannot be reached."""


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _api_error(method: str, path: str, response: httpx.Response) -> KubernetesAPIError:
    status: StatusPayload | None = None
    try:
        payload = response.json()
        if isinstance(payload, dict) and payload.get("kind") == "Status":
            status = StatusPayload.model_validate(payload)
    except (ValueError, ValidationError):
        status = None

    message = status.message if status is not None and status.message else response.reason_phrase
    reason = status.reason if status is not None else None
    return KubernetesAPIError(
        f"{method} {path} returned {response.status_code}: {message}",
        code=response.status_code,
        reason=reason,
    )


def _parse_response(response: httpx.Response) -> Secret:
    request = response.request
    try:
        return parse_secret(response.json())
    except (ValueError, ValidationError) as exc:
        raise KubernetesAPIError(
            f"{request.method} {request.url.path} returned an unreadable Secret: {exc}",
            code=response.status_code,
        ) from exc


@dataclass(slots=True)
class KubernetesSecretsClient:
    """Secrets of one namespace, addressed through the core/v1 REST API."""

    namespace: str
    config: KubernetesConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def collection_path(self) -> str:
        return f"/api/v1/namespaces/{quote(self.namespace, safe='')}/secrets"

    def item_path(self, name: str) -> str:
        return f"{self.collection_path}/{quote(name, safe='')}"

    def get(self, name: str) -> Secret | None:
        try:
            response = asyncio.run(self._request("GET", self.item_path(name)))
        except KubernetesAPIError as exc:
            if exc.is_not_found:
                return None
            raise
        return _parse_response(response)

    def create(self, obj: Secret) -> Secret:
        body = self._body(obj)
        response = asyncio.run(self._request("POST", self.collection_path, body=body))
        return _parse_response(response)

    def update(self, obj: Secret) -> Secret:
        body = self._body(obj)
        path = self.item_path(obj.metadata.name)
        response = asyncio.run(self._request("PUT", path, body=body))
        return _parse_response(response)

    def patch(self, name: str, operations: Sequence[JSONPatchOperation]) -> Secret:
        patch_body = json.dumps([operation.to_payload() for operation in operations])
        log.debug("patch body for %s/%s: %s", self.namespace, name, patch_body)
        response = asyncio.run(
            self._request(
                "PATCH",
                self.item_path(name),
                content=patch_body,
                headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
            )
        )
        return _parse_response(response)

    def delete(self, name: str) -> None:
        asyncio.run(self._request("DELETE", self.item_path(name)))

    def _body(self, obj: Secret) -> dict[str, object]:
        if obj.metadata.namespace and obj.metadata.namespace != self.namespace:
            raise KubernetesAPIError(
                f"Secret {obj.key} does not belong to namespace {self.namespace!r}"
            )
        try:
            body = serialize_secret(obj)
        except (ValueError, ValidationError) as exc:
            raise KubernetesAPIError(f"Secret {obj.key} cannot be serialized: {exc}") from exc
        metadata = body.get("metadata")
        if isinstance(metadata, dict):
            metadata["namespace"] = self.namespace
        return body

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: object = None,
        content: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        async with self.client_factory(self.config.resilience) as client:
            try:
                if body is not None:
                    response = await client.request(method, path, json=body, headers=headers)
                else:
                    response = await client.request(
                        method, path, content=content, headers=headers
                    )
            except httpx.HTTPError as exc:
                raise KubernetesAPIError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise _api_error(method, path, response)
        return response


def secrets_api_factory(
    config: KubernetesConfig,
    *,
    client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
) -> Callable[[str], KubernetesSecretsClient]:
    """Per-namespace client constructor matching the domain's API factory port."""

    effective_factory = client_factory or _default_client_factory

    def factory(namespace: str) -> KubernetesSecretsClient:
        return KubernetesSecretsClient(
            namespace=namespace,
            config=config,
            client_factory=effective_factory,
        )

    return factory
