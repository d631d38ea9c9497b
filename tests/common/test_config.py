from __future__ import annotations

import logging
import os

import pytest

from cdeploy.common.logging import parse_log_level
from cdeploy.config import (
    ConfigurationError,
    MissingConfigurationError,
    collect_env_secrets,
    env_flag,
    get_coolify_config,
    get_deploy_config,
    require_env_vars,
)

_DEPLOY_VARS = ("MANIFEST_PATH", "DOCKER_IMAGE_TAG", "DRY_RUN", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _DEPLOY_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("COOLIFY_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.delenv("MISSING_A", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_vars_treats_blank_values_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_vars(["EXAMPLE_VAR"])


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("TRUE", True), ("1", True), ("false", False), ("0", False), ("", False)],
)
def test_env_flag_values(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_flag_default_and_invalid(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLAG", raising=False)
    assert env_flag("EXAMPLE_FLAG", default=True) is True

    monkeypatch.setenv("EXAMPLE_FLAG", "yes please")
    with pytest.raises(ConfigurationError, match="EXAMPLE_FLAG"):
        env_flag("EXAMPLE_FLAG")


def test_collect_env_secrets_keeps_non_empty_prefixed_values() -> None:
    environ = {
        "COOLIFY_ENV_API": "A=1",
        "COOLIFY_ENV_EMPTY": "",
        "COOLIFY_TOKEN": "secret",
        "PATH": "/usr/bin",
    }

    assert collect_env_secrets(environ) == {"COOLIFY_ENV_API": "A=1"}


def test_get_coolify_config_strips_trailing_slash(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("COOLIFY_ENDPOINT_URL", "https://coolify.example.com/")
    clean_env.setenv("COOLIFY_TOKEN", "token-123")

    config = get_coolify_config()

    assert config.endpoint_url == "https://coolify.example.com"
    assert config.resilience.base_url == "https://coolify.example.com"
    assert config.resilience.default_headers is not None
    assert config.resilience.default_headers["Authorization"] == "Bearer token-123"
    assert "token-123" not in repr(config)


def test_get_coolify_config_requires_credentials(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("COOLIFY_ENDPOINT_URL", "https://coolify.example.com")

    with pytest.raises(MissingConfigurationError, match="COOLIFY_TOKEN"):
        get_coolify_config()


def test_coolify_retries_never_replay_posts(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("COOLIFY_ENDPOINT_URL", "https://coolify.example.com")
    clean_env.setenv("COOLIFY_TOKEN", "token-123")

    retry = get_coolify_config().resilience.retry

    assert "POST" not in retry.allowed_methods
    assert "GET" in retry.allowed_methods


def test_get_deploy_config_defaults(clean_env: pytest.MonkeyPatch) -> None:
    config = get_deploy_config()

    assert config.manifest_path is None
    assert config.docker_tag == "latest"
    assert config.dry_run is False
    assert config.log_level == "info"
    assert config.env_secrets == {}


def test_get_deploy_config_reads_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("MANIFEST_PATH", "coolify.manifest.json")
    clean_env.setenv("DOCKER_IMAGE_TAG", "v1.2.3")
    clean_env.setenv("DRY_RUN", "true")
    clean_env.setenv("LOG_LEVEL", "debug")
    clean_env.setenv("COOLIFY_ENV_API", "A=1")

    config = get_deploy_config()

    assert config.manifest_path == "coolify.manifest.json"
    assert config.docker_tag == "v1.2.3"
    assert config.dry_run is True
    assert config.log_level == "debug"
    assert config.env_secrets == {"COOLIFY_ENV_API": "A=1"}
    assert "A=1" not in repr(config)


@pytest.mark.parametrize(
    ("name", "level"),
    [("debug", logging.DEBUG), ("INFO", logging.INFO), ("warn", logging.WARNING)],
)
def test_parse_log_level(name: str, level: int) -> None:
    assert parse_log_level(name) == level


def test_parse_log_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="verbose"):
        parse_log_level("verbose")
