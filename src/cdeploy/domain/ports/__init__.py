"""Domain port definitions for adapters."""

from __future__ import annotations

from .directory import (
    ApplicationDirectory,
    CreatedApplication,
    Deployment,
    EnvVarEntry,
    RemoteApplication,
    RemoteEnvironment,
    RemoteEnvVar,
)

__all__ = [
    "ApplicationDirectory",
    "CreatedApplication",
    "Deployment",
    "EnvVarEntry",
    "RemoteApplication",
    "RemoteEnvVar",
    "RemoteEnvironment",
]
