"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .kubernetes import KubernetesConfig, get_kubernetes_config
from .logging import configure_logging, get_log_level
from .replication import DEFAULT_ANNOTATION_PREFIX, ReplicationConfig, get_replication_config

__all__ = [
    "DEFAULT_ANNOTATION_PREFIX",
    "ConfigurationError",
    "KubernetesConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReplicationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "env_flag",
    "get_kubernetes_config",
    "get_log_level",
    "get_replication_config",
    "optional_env_var",
    "require_env_vars",
]
