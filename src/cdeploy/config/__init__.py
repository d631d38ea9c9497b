"""Application configuration helpers."""

from __future__ import annotations

from cdeploy.common.logging import configure_logging

from .coolify import CoolifyConfig, build_resilience_config, get_coolify_config
from .deploy import (
    DEFAULT_DEPLOY_TIMEOUT_SECONDS,
    DEFAULT_DOCKER_TAG,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DeployConfig,
    get_deploy_config,
)
from .env import (
    ENV_SECRET_PREFIX,
    collect_env_secrets,
    env_flag,
    require_env_vars,
)
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

__all__ = [
    "DEFAULT_DEPLOY_TIMEOUT_SECONDS",
    "DEFAULT_DOCKER_TAG",
    "DEFAULT_POLL_INTERVAL_SECONDS",
    "ENV_SECRET_PREFIX",
    "ConfigurationError",
    "CoolifyConfig",
    "DeployConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "build_resilience_config",
    "collect_env_secrets",
    "configure_logging",
    "env_flag",
    "get_coolify_config",
    "get_deploy_config",
    "require_env_vars",
]
