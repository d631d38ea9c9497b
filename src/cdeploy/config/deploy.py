"""Run-scoped settings for applying a manifest."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .env import collect_env_secrets, env_flag

DEFAULT_DOCKER_TAG = "latest"
DEFAULT_LOG_LEVEL = "info"
DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_DEPLOY_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class DeployConfig:
    manifest_path: str | None = None
    docker_tag: str = DEFAULT_DOCKER_TAG
    dry_run: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    deploy_timeout_seconds: float = DEFAULT_DEPLOY_TIMEOUT_SECONDS
    env_secrets: dict[str, str] = field(default_factory=dict, repr=False)


def get_deploy_config() -> DeployConfig:
    """Read ``MANIFEST_PATH``, ``DOCKER_IMAGE_TAG``, ``DRY_RUN`` and friends."""

    return DeployConfig(
        manifest_path=os.getenv("MANIFEST_PATH") or None,
        docker_tag=os.getenv("DOCKER_IMAGE_TAG") or DEFAULT_DOCKER_TAG,
        dry_run=env_flag("DRY_RUN"),
        log_level=os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        env_secrets=collect_env_secrets(),
    )
