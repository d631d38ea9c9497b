"""Pydantic models describing the Coolify API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_optional_str(value: object) -> object:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class CoolifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ApplicationPayload(CoolifyBaseModel):
    # unknown keys are kept so ``state`` can report them
    model_config = ConfigDict(extra="allow", populate_by_name=True)

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

    _normalize_strings = field_validator(
        "ports_exposes", "health_check_port", "docker_registry_image_tag", mode="before"
    )(_to_optional_str)


class EnvironmentPayload(CoolifyBaseModel):
    id: int
    uuid: str
    name: str


class EnvVarPayload(CoolifyBaseModel):
    uuid: str
    key: str
    value: str | None = None
    is_preview: bool = False


class CreateApplicationResponse(CoolifyBaseModel):
    uuid: str


class DeploymentRef(CoolifyBaseModel):
    deployment_uuid: str | None = None
    resource_uuid: str | None = None
    message: str | None = None


class DeployResponse(CoolifyBaseModel):
    deployments: list[DeploymentRef] = Field(default_factory=list)


class DeploymentPayload(CoolifyBaseModel):
    deployment_uuid: str | None = None
    status: str


class ErrorResponse(CoolifyBaseModel):
    message: str | None = None
