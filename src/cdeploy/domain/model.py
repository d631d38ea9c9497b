"""Desired-state model: the manifest and the resources it declares."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HealthCheck:
    path: str | None = None
    port: str | None = None
    host: str | None = None
    method: str | None = None
    return_code: int | None = None
    scheme: str | None = None
    response_text: str | None = None
    interval: int | None = None
    timeout: int | None = None
    retries: int | None = None
    start_period: int | None = None


@dataclass(frozen=True, slots=True)
class Resource:
    """One declared application, joined to remote state by ``name``."""

    name: str
    docker_image_name: str
    description: str = ""
    env_secret_name: str | None = None
    domains: str | None = None
    ports_exposes: str | None = None
    health_check: HealthCheck | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    project_id: str
    destination_id: str
    server_uuid: str
    environment_name: str
    resources: tuple[Resource, ...] = ()

    @property
    def resource_names(self) -> frozenset[str]:
        return frozenset(resource.name for resource in self.resources)
