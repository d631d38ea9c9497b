"""Errors raised while reading cdeploy settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting such as ``DRY_RUN`` holds a value cdeploy cannot interpret."""


class MissingConfigurationError(ConfigurationError):
    """``COOLIFY_ENDPOINT_URL``, ``COOLIFY_TOKEN`` or another required variable is unset."""
