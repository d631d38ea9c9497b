"""Create/update payloads derived from declared resources.

Optional fields are ``None`` when absent and are left out of the payload entirely;
the platform rejects empty strings for ``domains`` and ``ports_exposes``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import HealthCheck, Resource
    from .ports.directory import RemoteApplication

# payload key -> attribute on RemoteApplication where they differ
_REMOTE_FIELD_ALIASES = {"domains": "fqdn"}


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateApplicationOptions:
    docker_registry_image_name: str
    docker_registry_image_tag: str
    name: str
    description: str | None = None
    domains: str | None = None
    ports_exposes: str | None = None
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

    def to_payload(self) -> dict[str, object]:
        return {
            field.name: value
            for field in fields(self)
            if (value := getattr(self, field.name)) is not None
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateApplicationOptions(UpdateApplicationOptions):
    project_uuid: str
    server_uuid: str
    environment_name: str
    environment_uuid: str
    destination_uuid: str
    instant_deploy: bool = False


def _blank_to_none(value: str | None) -> str | None:
    return value or None


def _blank_to_none_any(value: object) -> object:
    return None if value == "" else value


def _health_check_fields(health_check: HealthCheck | None) -> dict[str, object]:
    if health_check is None:
        return {}
    return {
        "health_check_enabled": True,
        "health_check_path": health_check.path,
        "health_check_port": health_check.port,
        "health_check_host": health_check.host,
        "health_check_method": health_check.method,
        "health_check_return_code": health_check.return_code,
        "health_check_scheme": health_check.scheme,
        "health_check_response_text": health_check.response_text,
        "health_check_interval": health_check.interval,
        "health_check_timeout": health_check.timeout,
        "health_check_retries": health_check.retries,
        "health_check_start_period": health_check.start_period,
    }


def build_update_options(resource: Resource, *, docker_tag: str) -> UpdateApplicationOptions:
    return UpdateApplicationOptions(
        docker_registry_image_name=resource.docker_image_name,
        docker_registry_image_tag=docker_tag,
        name=resource.name,
        description=resource.description,
        domains=_blank_to_none(resource.domains),
        ports_exposes=_blank_to_none(resource.ports_exposes),
        **_health_check_fields(resource.health_check),  # type: ignore[arg-type]
    )


def build_create_options(
    resource: Resource,
    *,
    project_uuid: str,
    server_uuid: str,
    environment_name: str,
    environment_uuid: str,
    destination_uuid: str,
    docker_tag: str,
) -> CreateApplicationOptions:
    """Build the creation payload; deploy-on-create stays off until env vars are set."""

    return CreateApplicationOptions(
        project_uuid=project_uuid,
        server_uuid=server_uuid,
        environment_name=environment_name,
        environment_uuid=environment_uuid,
        destination_uuid=destination_uuid,
        docker_registry_image_name=resource.docker_image_name,
        docker_registry_image_tag=docker_tag,
        name=resource.name,
        description=resource.description,
        domains=_blank_to_none(resource.domains),
        ports_exposes=_blank_to_none(resource.ports_exposes),
        instant_deploy=False,
        **_health_check_fields(resource.health_check),  # type: ignore[arg-type]
    )


def update_is_noop(options: UpdateApplicationOptions, application: RemoteApplication) -> bool:
    """Return True when applying ``options`` would not change ``application``."""

    for key, value in options.to_payload().items():
        remote_value = getattr(application, _REMOTE_FIELD_ALIASES.get(key, key), None)
        # the platform reports blank text fields as null
        if _blank_to_none_any(remote_value) != _blank_to_none_any(value):
            return False
    return True
