"""Directory wrapper that simulates every mutation.

Reads go to the wrapped directory so predictions reflect real remote state;
writes are logged and answered with synthetic values instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cdeploy.domain.ports.directory import CreatedApplication, Deployment

if TYPE_CHECKING:
    from cdeploy.domain.options import CreateApplicationOptions, UpdateApplicationOptions
    from cdeploy.domain.ports.directory import (
        ApplicationDirectory,
        EnvVarEntry,
        RemoteApplication,
        RemoteEnvironment,
        RemoteEnvVar,
    )

DRY_RUN_APPLICATION_UUID = "dry-run-uuid"
DRY_RUN_DEPLOYMENT_UUID = "dry-run-deployment-uuid"

log = logging.getLogger(__name__)


class DryRunDirectory:
    def __init__(
        self,
        directory: ApplicationDirectory,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._directory = directory
        self._log = logger or log

    async def list_applications(self) -> list[RemoteApplication]:
        return await self._directory.list_applications()

    async def find_application_by_name(
        self, name: str, environment_id: int
    ) -> RemoteApplication | None:
        return await self._directory.find_application_by_name(name, environment_id)

    async def list_environments(self, project_uuid: str) -> list[RemoteEnvironment]:
        return await self._directory.list_environments(project_uuid)

    async def find_environment_by_name(
        self, project_uuid: str, name: str
    ) -> RemoteEnvironment | None:
        return await self._directory.find_environment_by_name(project_uuid, name)

    async def list_environment_variables(self, uuid: str) -> list[RemoteEnvVar]:
        if uuid == DRY_RUN_APPLICATION_UUID:
            return []
        return await self._directory.list_environment_variables(uuid)

    async def get_deployment(self, deployment_uuid: str) -> Deployment | None:
        if deployment_uuid == DRY_RUN_DEPLOYMENT_UUID:
            return Deployment(deployment_uuid=deployment_uuid, status="finished")
        return await self._directory.get_deployment(deployment_uuid)

    async def create_application(self, options: CreateApplicationOptions) -> CreatedApplication:
        self._log.info("[DRY RUN] Would create application %s", options.name)
        self._log.debug("[DRY RUN] Create payload: %s", options.to_payload())
        return CreatedApplication(uuid=DRY_RUN_APPLICATION_UUID)

    async def update_application(self, uuid: str, options: UpdateApplicationOptions) -> None:
        self._log.info("[DRY RUN] Would update application %s (%s)", options.name, uuid)
        self._log.debug("[DRY RUN] Update payload: %s", options.to_payload())

    async def update_environment_variables(self, uuid: str, env_vars: list[EnvVarEntry]) -> None:
        self._log.info(
            "[DRY RUN] Would update %d environment variables on %s", len(env_vars), uuid
        )

    async def delete_environment_variable(self, app_uuid: str, env_var_uuid: str) -> None:
        self._log.info(
            "[DRY RUN] Would delete environment variable %s from %s", env_var_uuid, app_uuid
        )

    async def delete_application(self, uuid: str) -> None:
        self._log.info("[DRY RUN] Would delete application %s", uuid)

    async def trigger_deploy(self, uuid: str) -> str | None:
        self._log.info("[DRY RUN] Would trigger deployment of %s", uuid)
        return DRY_RUN_DEPLOYMENT_UUID
