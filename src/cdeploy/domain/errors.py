"""Error types raised by the reconciliation domain."""

from __future__ import annotations


class CdeployError(RuntimeError):
    """Base class for domain errors."""


class EnvFileParseError(CdeployError, ValueError):
    """Raised when a ``.env`` formatted secret contains a malformed line."""

    def __init__(self, message: str, *, line_number: int) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


class EnvironmentNotFoundError(CdeployError):
    """Raised when the declared environment does not exist in the project."""

    def __init__(self, project_uuid: str, environment_name: str) -> None:
        super().__init__(
            f"Environment '{environment_name}' not found in project '{project_uuid}'"
        )
        self.project_uuid = project_uuid
        self.environment_name = environment_name


class DeploymentFailedError(CdeployError):
    def __init__(self, deployment_uuid: str, status: str) -> None:
        super().__init__(f"Deployment {deployment_uuid} failed (status: {status})")
        self.deployment_uuid = deployment_uuid
        self.status = status


class DeploymentTimeoutError(CdeployError):
    def __init__(self, deployment_uuid: str, timeout_seconds: float) -> None:
        super().__init__(f"Deployment {deployment_uuid} timed out after {timeout_seconds:g}s")
        self.deployment_uuid = deployment_uuid
        self.timeout_seconds = timeout_seconds


class DuplicateResourceError(CdeployError):
    """Raised when a manifest declares the same resource name more than once."""

    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Duplicate resource names in manifest: {', '.join(sorted(names))}")
        self.names = names
