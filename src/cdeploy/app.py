"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack
from dataclasses import asdict
from logging import getLogger
from typing import TYPE_CHECKING

from cdeploy.adapters.coolify import CoolifyClient
from cdeploy.config import get_coolify_config
from cdeploy.config.deploy import DEFAULT_DEPLOY_TIMEOUT_SECONDS, DEFAULT_POLL_INTERVAL_SECONDS
from cdeploy.domain.errors import EnvironmentNotFoundError
from cdeploy.domain.reconciliation import (
    DryRunDirectory,
    Reconciler,
    ReconcilerOptions,
    ReconcileResult,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cdeploy.config import CoolifyConfig
    from cdeploy.domain.model import Manifest
    from cdeploy.domain.ports.directory import ApplicationDirectory

log = getLogger(__name__)

# application fields reported by ``state``
STATE_KEYS = (
    "uuid",
    "name",
    "docker_registry_image_name",
    "docker_registry_image_tag",
    "fqdn",
    "health_check_enabled",
    "health_check_host",
    "health_check_interval",
    "health_check_method",
    "health_check_path",
    "health_check_port",
    "health_check_response_text",
    "health_check_retries",
    "health_check_return_code",
    "health_check_scheme",
    "health_check_start_period",
    "health_check_timeout",
    "last_online_at",
    "last_restart_at",
    "last_restart_type",
    "ports_exposes",
    "restart_count",
    "status",
    "created_at",
    "updated_at",
)


def apply_manifest(
    manifest: Manifest,
    *,
    docker_tag: str,
    env_secrets: Mapping[str, str] | None = None,
    dry_run: bool = False,
    server_uuid: str | None = None,
    directory: ApplicationDirectory | None = None,
    config: CoolifyConfig | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    deploy_timeout: float = DEFAULT_DEPLOY_TIMEOUT_SECONDS,
) -> ReconcileResult:
    """Reconcile ``manifest`` against Coolify and return the aggregate result."""

    options = ReconcilerOptions(
        manifest=manifest,
        docker_tag=docker_tag,
        env_secrets=dict(env_secrets or {}),
        server_uuid=server_uuid,
        poll_interval=poll_interval,
        deploy_timeout=deploy_timeout,
    )
    log.info(
        "Applying manifest: project=%s, environment=%s, resources=%d, tag=%s, dry_run=%s",
        manifest.project_id,
        manifest.environment_name,
        len(manifest.resources),
        docker_tag,
        dry_run,
    )
    return asyncio.run(
        _apply_manifest_async(options, dry_run=dry_run, directory=directory, config=config)
    )


async def _apply_manifest_async(
    options: ReconcilerOptions,
    *,
    dry_run: bool,
    directory: ApplicationDirectory | None,
    config: CoolifyConfig | None,
) -> ReconcileResult:
    async with AsyncExitStack() as stack:
        if directory is None:
            directory = await stack.enter_async_context(
                CoolifyClient(config=config or get_coolify_config())
            )
        if dry_run:
            directory = DryRunDirectory(directory)
        return await Reconciler(directory, options=options).reconcile()


def describe_state(
    manifest: Manifest,
    *,
    directory: ApplicationDirectory | None = None,
    config: CoolifyConfig | None = None,
) -> list[dict[str, object]]:
    """Report the remote state of every declared resource in the manifest's environment."""

    return asyncio.run(_describe_state_async(manifest, directory=directory, config=config))


async def _describe_state_async(
    manifest: Manifest,
    *,
    directory: ApplicationDirectory | None,
    config: CoolifyConfig | None,
) -> list[dict[str, object]]:
    async with AsyncExitStack() as stack:
        if directory is None:
            directory = await stack.enter_async_context(
                CoolifyClient(config=config or get_coolify_config())
            )
        environment = await directory.find_environment_by_name(
            manifest.project_id, manifest.environment_name
        )
        if environment is None:
            raise EnvironmentNotFoundError(manifest.project_id, manifest.environment_name)

        applications = {
            application.name: application
            for application in await directory.list_applications()
            if application.environment_id == environment.id
        }

    states: list[dict[str, object]] = []
    for resource in manifest.resources:
        application = applications.get(resource.name)
        if application is None:
            states.append({"name": resource.name, "exists": False})
            continue
        fields = application.extra or asdict(application)
        state: dict[str, object] = {"exists": True}
        state.update({key: fields[key] for key in STATE_KEYS if key in fields})
        states.append(state)
    return states
