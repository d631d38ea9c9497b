"""Builders for manifests and environments used across tests."""

from __future__ import annotations

from cdeploy.domain.model import Manifest, Resource
from cdeploy.domain.ports.directory import RemoteEnvironment

PROJECT_UUID = "project-uuid"
PRODUCTION = RemoteEnvironment(id=1, uuid="env-prod-uuid", name="production")
STAGING = RemoteEnvironment(id=2, uuid="env-staging-uuid", name="staging")


def make_resource(name: str = "api", **overrides: object) -> Resource:
    values: dict[str, object] = {
        "name": name,
        "description": f"The {name} service",
        "docker_image_name": f"ghcr.io/acme/{name}",
        "domains": f"https://{name}.example.com",
        "ports_exposes": "8080",
    }
    values.update(overrides)
    return Resource(**values)  # type: ignore[arg-type]


def make_manifest(*resources: Resource, environment_name: str = "production") -> Manifest:
    return Manifest(
        project_id=PROJECT_UUID,
        destination_id="destination-uuid",
        server_uuid="server-uuid",
        environment_name=environment_name,
        resources=resources,
    )
