from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from replicator.config import (
    DEFAULT_ANNOTATION_PREFIX,
    ConfigurationError,
    MissingConfigurationError,
    env_flag,
    get_kubernetes_config,
    get_log_level,
    get_replication_config,
    require_env_vars,
)

if TYPE_CHECKING:
    from pathlib import Path

_KUBERNETES_VARS = (
    "KUBERNETES_API_URL",
    "KUBERNETES_SERVICE_HOST",
    "KUBERNETES_SERVICE_PORT",
    "KUBERNETES_TOKEN",
    "KUBERNETES_TOKEN_FILE",
    "KUBERNETES_CA_FILE",
    "KUBERNETES_INSECURE_SKIP_TLS_VERIFY",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (*_KUBERNETES_VARS, "REPLICATOR_ALLOW_ALL", "REPLICATOR_ANNOTATION_PREFIX"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_reports_blank_and_missing_values(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")
    monkeypatch.delenv("OTHER_VAR", raising=False)

    with pytest.raises(MissingConfigurationError, match="EXAMPLE_VAR, OTHER_VAR"):
        require_env_vars(["OTHER_VAR", "EXAMPLE_VAR"])


@pytest.mark.parametrize(("value", "expected"), [("true", True), ("1", True), ("off", False)])
def test_env_flag_parses_common_spellings(
    monkeypatch: pytest.MonkeyPatch,
    value: str,
    expected: bool,  # noqa: FBT001
) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", value)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(ConfigurationError, match="EXAMPLE_FLAG"):
        env_flag("EXAMPLE_FLAG")


def test_kubernetes_config_from_explicit_url_and_token(
    clean_env: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    clean_env.setenv("KUBERNETES_API_URL", "https://cluster.example:6443/")
    clean_env.setenv("KUBERNETES_TOKEN", "abc")

    config = get_kubernetes_config(service_account_dir=tmp_path)

    assert config.api_url == "https://cluster.example:6443"
    assert config.token == "abc"
    assert config.resilience.base_url == "https://cluster.example:6443"
    assert config.resilience.verify is True
    assert config.resilience.default_headers == {
        "Accept": "application/json",
        "Authorization": "Bearer abc",
    }


def test_kubernetes_config_falls_back_to_in_cluster_values(
    clean_env: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    (tmp_path / "token").write_text("sa-token\n", encoding="utf-8")
    (tmp_path / "ca.crt").write_text("-----BEGIN CERTIFICATE-----\n", encoding="utf-8")
    clean_env.setenv("KUBERNETES_SERVICE_HOST", "10.0.0.1")
    clean_env.setenv("KUBERNETES_SERVICE_PORT", "443")

    config = get_kubernetes_config(service_account_dir=tmp_path)

    assert config.api_url == "https://10.0.0.1:443"
    assert config.token == "sa-token"
    assert config.resilience.verify == str(tmp_path / "ca.crt")


def test_kubernetes_config_brackets_ipv6_hosts(
    clean_env: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    clean_env.setenv("KUBERNETES_SERVICE_HOST", "fd00::1")
    clean_env.setenv("KUBERNETES_SERVICE_PORT", "443")

    assert get_kubernetes_config(service_account_dir=tmp_path).api_url == "https://[fd00::1]:443"


def test_kubernetes_config_can_skip_tls_verification(
    clean_env: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    clean_env.setenv("KUBERNETES_API_URL", "https://cluster.example")
    clean_env.setenv("KUBERNETES_INSECURE_SKIP_TLS_VERIFY", "true")

    config = get_kubernetes_config(service_account_dir=tmp_path)

    assert config.resilience.verify is False
    assert config.token is None
    assert config.resilience.default_headers == {"Accept": "application/json"}


def test_kubernetes_config_requires_an_api_server(
    clean_env: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    with pytest.raises(MissingConfigurationError, match="KUBERNETES_API_URL"):
        get_kubernetes_config(service_account_dir=tmp_path)


def test_kubernetes_config_rejects_non_http_urls(
    clean_env: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    clean_env.setenv("KUBERNETES_API_URL", "cluster.example:6443")

    with pytest.raises(ConfigurationError, match="http"):
        get_kubernetes_config(service_account_dir=tmp_path)


def test_replication_config_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = get_replication_config()

    assert config.allow_all is False
    assert config.annotation_prefix == DEFAULT_ANNOTATION_PREFIX


def test_replication_config_from_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("REPLICATOR_ALLOW_ALL", "true")
    clean_env.setenv("REPLICATOR_ANNOTATION_PREFIX", "example.com/")

    config = get_replication_config()

    assert config.allow_all is True
    assert config.annotation_prefix == "example.com"


def test_replication_config_rejects_nested_prefix(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("REPLICATOR_ANNOTATION_PREFIX", "example.com/sub")

    with pytest.raises(ConfigurationError, match="annotation prefix"):
        get_replication_config()


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPLICATOR_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG

    monkeypatch.setenv("REPLICATOR_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError, match="chatty"):
        get_log_level()


def test_kubernetes_config_names_missing_in_cluster_variable(
    clean_env: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    clean_env.setenv("KUBERNETES_SERVICE_HOST", "10.0.0.1")

    with pytest.raises(MissingConfigurationError, match="KUBERNETES_SERVICE_PORT") as excinfo:
        get_kubernetes_config(service_account_dir=tmp_path)

    assert "KUBERNETES_SERVICE_HOST" not in str(excinfo.value)
