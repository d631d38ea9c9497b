"""Load and validate manifest documents."""

from __future__ import annotations

import json
from logging import getLogger
from pathlib import Path

from pydantic import ValidationError

from cdeploy.domain.model import HealthCheck, Manifest, Resource

from .schema import HealthCheckModel, ManifestModel, ResourceModel

log = getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest cannot be read or does not match the schema."""


def parse_manifest(data: object) -> Manifest:
    try:
        model = ManifestModel.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(f"Invalid manifest: {exc}") from exc
    return _to_manifest(model)


def load_manifest(path: str | Path) -> Manifest:
    manifest_path = Path(path).expanduser().resolve()
    log.debug("Reading manifest file %s", manifest_path)
    try:
        content = manifest_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {manifest_path}: {exc}") from exc
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Manifest {manifest_path} is not valid JSON: {exc}") from exc
    return parse_manifest(data)


def _to_manifest(model: ManifestModel) -> Manifest:
    return Manifest(
        project_id=model.project_id,
        destination_id=model.destination_id,
        server_uuid=model.server_uuid,
        environment_name=model.environment_name,
        resources=tuple(_to_resource(resource) for resource in model.resources),
    )


def _to_resource(model: ResourceModel) -> Resource:
    return Resource(
        name=model.name,
        description=model.description,
        docker_image_name=model.docker_image_name,
        env_secret_name=model.env_secret_name,
        domains=model.domains,
        ports_exposes=model.ports_exposes,
        health_check=_to_health_check(model.health_check),
    )


def _to_health_check(model: HealthCheckModel | None) -> HealthCheck | None:
    if model is None:
        return None
    return HealthCheck(**model.model_dump())
