"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

ENV_SECRET_PREFIX = "COOLIFY_ENV_"

_TRUTHY = frozenset({"1", "true"})
_FALSY = frozenset({"", "0", "false"})


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def env_flag(name: str, *, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}")


def collect_env_secrets(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return every non-empty ``COOLIFY_ENV_*`` variable keyed by its full name."""

    source = os.environ if environ is None else environ
    return {
        name: value
        for name, value in source.items()
        if name.startswith(ENV_SECRET_PREFIX) and value
    }
