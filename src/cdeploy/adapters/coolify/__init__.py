"""Public interface for the Coolify adapter."""

from __future__ import annotations

from .client import ApiError, CoolifyClient
from .schema import ApplicationPayload, DeploymentPayload, EnvironmentPayload, EnvVarPayload
from .translator import parse_application

__all__ = [
    "ApiError",
    "ApplicationPayload",
    "CoolifyClient",
    "DeploymentPayload",
    "EnvVarPayload",
    "EnvironmentPayload",
    "parse_application",
]
