"""Pydantic models for ``coolify.manifest.json``.

Unknown keys are rejected so a misspelled field fails loudly instead of being
silently ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ManifestBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class HealthCheckModel(ManifestBaseModel):
    path: str | None = None
    port: str | None = None
    host: str | None = None
    method: str | None = None
    return_code: int | None = Field(default=None, alias="returnCode")
    scheme: str | None = None
    response_text: str | None = Field(default=None, alias="responseText")
    interval: int | None = None
    timeout: int | None = None
    retries: int | None = None
    start_period: int | None = Field(default=None, alias="startPeriod")

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_string(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ResourceModel(ManifestBaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    docker_image_name: str = Field(alias="dockerImageName", min_length=1)
    env_secret_name: str | None = Field(default=None, alias="envSecretName")
    domains: str | None = None
    ports_exposes: str | None = Field(default=None, alias="portsExposes")
    health_check: HealthCheckModel | None = Field(default=None, alias="healthCheck")


class ManifestModel(ManifestBaseModel):
    project_id: str = Field(alias="projectId", min_length=1)
    destination_id: str = Field(alias="destinationId", min_length=1)
    server_uuid: str = Field(alias="serverUuid", min_length=1)
    environment_name: str = Field(alias="environmentName", min_length=1)
    resources: list[ResourceModel]

    @model_validator(mode="after")
    def _unique_resource_names(self) -> ManifestModel:
        seen: set[str] = set()
        duplicates: set[str] = set()
        for resource in self.resources:
            if resource.name in seen:
                duplicates.add(resource.name)
            seen.add(resource.name)
        if duplicates:
            raise ValueError(f"duplicate resource names: {', '.join(sorted(duplicates))}")
        return self
