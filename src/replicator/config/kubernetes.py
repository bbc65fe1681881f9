"""Kubernetes API connection settings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

SERVICE_ACCOUNT_DIR: Final[Path] = Path("/var/run/secrets/kubernetes.io/serviceaccount")
KUBERNETES_TIMEOUT_SECONDS = 15.0
# client-go defaults to QPS=5/burst=10; stay in the same range
KUBERNETES_RATE_LIMIT = RateLimit(max_calls=10, per_seconds=1.0)


@dataclass(frozen=True, slots=True)
class KubernetesConfig:
    """Holds Kubernetes API server connection values."""

    api_url: str
    token: str | None
    resilience: ResilienceConfig


def _in_cluster_url() -> str:
    try:
        values = require_env_vars(["KUBERNETES_SERVICE_HOST", "KUBERNETES_SERVICE_PORT"])
    except MissingConfigurationError as exc:
        raise MissingConfigurationError(f"Set KUBERNETES_API_URL or run in-cluster. {exc}") from exc
    host = values["KUBERNETES_SERVICE_HOST"].strip()
    port = values["KUBERNETES_SERVICE_PORT"].strip()
    if ":" in host:
        host = f"[{host}]"
    return f"https://{host}:{port}"


def _read_token(path: Path) -> str | None:
    if not path.is_file():
        return None
    token = path.read_text(encoding="utf-8").strip()
    return token or None


def _request_headers(token: str | None) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def get_kubernetes_config(
    *,
    service_account_dir: Path = SERVICE_ACCOUNT_DIR,
    resilience: ResilienceConfig | None = None,
) -> KubernetesConfig:
    """Resolve API server settings from the environment, falling back to in-cluster values."""

    api_url = optional_env_var("KUBERNETES_API_URL") or _in_cluster_url()
    api_url = api_url.rstrip("/")
    if not api_url.startswith(("http://", "https://")):
        raise ConfigurationError(f"KUBERNETES_API_URL must be an http(s) URL: {api_url!r}")

    token = optional_env_var("KUBERNETES_TOKEN")
    if token is None:
        token_file = optional_env_var("KUBERNETES_TOKEN_FILE")
        token = _read_token(Path(token_file) if token_file else service_account_dir / "token")

    ca_file = optional_env_var("KUBERNETES_CA_FILE")
    if ca_file is None and (service_account_dir / "ca.crt").is_file():
        ca_file = str(service_account_dir / "ca.crt")
    verify: str | bool = ca_file if ca_file is not None else True
    if env_flag("KUBERNETES_INSECURE_SKIP_TLS_VERIFY"):
        verify = False

    effective = resilience or ResilienceConfig(
        name="kubernetes",
        base_url=api_url,
        timeout_seconds=KUBERNETES_TIMEOUT_SECONDS,
        ratelimit=KUBERNETES_RATE_LIMIT,
        verify=verify,
    )
    if effective.default_headers is None:
        effective = replace(effective, default_headers=_request_headers(token))

    return KubernetesConfig(api_url=api_url, token=token, resilience=effective)
