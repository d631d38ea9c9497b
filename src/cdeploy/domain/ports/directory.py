"""Port for the remote application directory the engine reconciles against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cdeploy.domain.options import CreateApplicationOptions, UpdateApplicationOptions


@dataclass(frozen=True, slots=True)
class RemoteEnvironment:
    id: int
    uuid: str
    name: str


@dataclass(frozen=True, slots=True)
class RemoteApplication:
    """Snapshot of an application as reported by the platform."""

    uuid: str
    name: str
    environment_id: int | None = None
    description: str | None = None
    docker_registry_image_name: str | None = None
    docker_registry_image_tag: str | None = None
    fqdn: str | None = None
    ports_exposes: str | None = None
    status: str | None = None
    health_check_enabled: bool | None = None
    health_check_path: str | None = None
    health_check_port: str | None = None
    health_check_host: str | None = None
    health_check_method: str | None = None
    health_check_return_code: int | None = None
    health_check_scheme: str | None = None
    health_check_response_text: str | None = None
    health_check_interval: int | None = None
    health_check_timeout: int | None = None
    health_check_retries: int | None = None
    health_check_start_period: int | None = None
    extra: dict[str, object] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class EnvVarEntry:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class RemoteEnvVar:
    uuid: str
    key: str
    value: str | None = None


@dataclass(frozen=True, slots=True)
class CreatedApplication:
    uuid: str


@dataclass(frozen=True, slots=True)
class Deployment:
    deployment_uuid: str
    status: str


@runtime_checkable
class ApplicationDirectory(Protocol):
    """Read and write access to applications, their env vars and deployments."""

    async def list_applications(self) -> list[RemoteApplication]: ...

    async def find_application_by_name(
        self, name: str, environment_id: int
    ) -> RemoteApplication | None: ...

    async def list_environments(self, project_uuid: str) -> list[RemoteEnvironment]: ...

    async def find_environment_by_name(
        self, project_uuid: str, name: str
    ) -> RemoteEnvironment | None: ...

    async def create_application(self, options: CreateApplicationOptions) -> CreatedApplication: ...

    async def update_application(self, uuid: str, options: UpdateApplicationOptions) -> None: ...

    async def list_environment_variables(self, uuid: str) -> list[RemoteEnvVar]: ...

    async def update_environment_variables(
        self, uuid: str, env_vars: list[EnvVarEntry]
    ) -> None: ...

    async def delete_environment_variable(self, app_uuid: str, env_var_uuid: str) -> None: ...

    async def delete_application(self, uuid: str) -> None: ...

    async def trigger_deploy(self, uuid: str) -> str | None: ...

    async def get_deployment(self, deployment_uuid: str) -> Deployment | None: ...


__all__ = [
    "ApplicationDirectory",
    "CreatedApplication",
    "Deployment",
    "EnvVarEntry",
    "RemoteApplication",
    "RemoteEnvVar",
    "RemoteEnvironment",
]
