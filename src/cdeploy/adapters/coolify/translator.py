"""Translate Coolify payloads into directory port types."""

from __future__ import annotations

from cdeploy.domain.ports.directory import (
    Deployment,
    RemoteApplication,
    RemoteEnvironment,
    RemoteEnvVar,
)

from .schema import ApplicationPayload, DeploymentPayload, EnvironmentPayload, EnvVarPayload


def parse_application(payload: object) -> RemoteApplication:
    validated = ApplicationPayload.model_validate(payload)
    return RemoteApplication(
        uuid=validated.uuid,
        name=validated.name,
        environment_id=validated.environment_id,
        description=validated.description,
        docker_registry_image_name=validated.docker_registry_image_name,
        docker_registry_image_tag=validated.docker_registry_image_tag,
        fqdn=validated.fqdn,
        ports_exposes=validated.ports_exposes,
        status=validated.status,
        health_check_enabled=validated.health_check_enabled,
        health_check_path=validated.health_check_path,
        health_check_port=validated.health_check_port,
        health_check_host=validated.health_check_host,
        health_check_method=validated.health_check_method,
        health_check_return_code=validated.health_check_return_code,
        health_check_scheme=validated.health_check_scheme,
        health_check_response_text=validated.health_check_response_text,
        health_check_interval=validated.health_check_interval,
        health_check_timeout=validated.health_check_timeout,
        health_check_retries=validated.health_check_retries,
        health_check_start_period=validated.health_check_start_period,
        extra=validated.model_dump(),
    )


def parse_environment(payload: object) -> RemoteEnvironment:
    validated = EnvironmentPayload.model_validate(payload)
    return RemoteEnvironment(id=validated.id, uuid=validated.uuid, name=validated.name)


def parse_env_var(payload: EnvVarPayload) -> RemoteEnvVar:
    return RemoteEnvVar(uuid=payload.uuid, key=payload.key, value=payload.value)


def parse_deployment(payload: object, *, fallback_uuid: str) -> Deployment:
    validated = DeploymentPayload.model_validate(payload)
    return Deployment(
        deployment_uuid=validated.deployment_uuid or fallback_uuid,
        status=validated.status,
    )
