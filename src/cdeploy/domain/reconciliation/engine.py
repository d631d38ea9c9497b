"""Reconciliation engine converging remote applications onto a manifest.

One ``reconcile()`` call resolves the target environment, prepares every declared
resource (create or update, then env-var sync), triggers all deployments at once,
waits for all of them at once, prunes undeclared applications and aggregates the
outcome. Remote state is re-read on every call; nothing is cached between runs.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cdeploy.domain.envfile import parse_env_file
from cdeploy.domain.errors import DuplicateResourceError, EnvironmentNotFoundError
from cdeploy.domain.options import build_create_options, build_update_options, update_is_noop

from .deploy import DEFAULT_DEPLOY_TIMEOUT, DEFAULT_POLL_INTERVAL, wait_for_deployment
from .envsync import sync_environment_variables
from .result import ReconcileAction, ReconcileResourceResult, ReconcileResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cdeploy.domain.model import Manifest, Resource
    from cdeploy.domain.ports.directory import ApplicationDirectory, RemoteEnvironment

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcilerOptions:
    manifest: Manifest
    docker_tag: str
    env_secrets: Mapping[str, str] = field(default_factory=dict)
    server_uuid: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    deploy_timeout: float = DEFAULT_DEPLOY_TIMEOUT


@dataclass(frozen=True, slots=True)
class _PreparedResource:
    """A resource whose application and env vars are in place, ready to deploy."""

    name: str
    app_uuid: str
    action: ReconcileAction


@dataclass(frozen=True, slots=True)
class _TriggeredResource:
    prepared: _PreparedResource
    deployment_uuid: str


class Reconciler:
    def __init__(
        self,
        directory: ApplicationDirectory,
        *,
        options: ReconcilerOptions,
        logger: logging.Logger | None = None,
    ) -> None:
        self._directory = directory
        self._options = options
        self._log = logger or log

    @property
    def manifest(self) -> Manifest:
        return self._options.manifest

    async def reconcile(self) -> ReconcileResult:
        """Run one full reconciliation.

        Raises :class:`EnvironmentNotFoundError` (or the directory's own error) when
        the target environment cannot be resolved; every later failure is recorded
        on the affected resource instead.
        """

        _ensure_unique_names(self.manifest)
        environment = await self._resolve_environment()

        results: dict[str, ReconcileResourceResult] = {}
        prepared: list[_PreparedResource] = []
        for resource in self.manifest.resources:
            outcome = await self._prepare(resource, environment)
            if isinstance(outcome, ReconcileResourceResult):
                results[resource.name] = outcome
            else:
                prepared.append(outcome)

        triggered: list[_TriggeredResource] = []
        for outcome in await self._trigger_all(prepared):
            if isinstance(outcome, ReconcileResourceResult):
                results[outcome.name] = outcome
            else:
                triggered.append(outcome)

        for result in await self._wait_all(triggered):
            results[result.name] = result

        ordered = [results[resource.name] for resource in self.manifest.resources]
        ordered.extend(await self._prune(environment))

        result = ReconcileResult.from_resources(ordered)
        self._log.info(
            "Reconciliation finished: created=%d updated=%d unchanged=%d pruned=%d failed=%d",
            result.total_created,
            result.total_updated,
            result.total_unchanged,
            result.total_pruned,
            result.total_failed,
        )
        return result

    async def _resolve_environment(self) -> RemoteEnvironment:
        manifest = self.manifest
        environment = await self._directory.find_environment_by_name(
            manifest.project_id, manifest.environment_name
        )
        if environment is None:
            raise EnvironmentNotFoundError(manifest.project_id, manifest.environment_name)
        self._log.debug(
            "Resolved environment %s to id=%s uuid=%s",
            environment.name,
            environment.id,
            environment.uuid,
        )
        return environment

    async def _prepare(
        self,
        resource: Resource,
        environment: RemoteEnvironment,
    ) -> _PreparedResource | ReconcileResourceResult:
        try:
            app_uuid, action = await self._create_or_update(resource, environment)
            if await self._sync_env_vars(resource, app_uuid) and (
                action is ReconcileAction.UNCHANGED
            ):
                action = ReconcileAction.UPDATED
        except Exception as exc:
            self._log.exception("Failed to reconcile resource %s", resource.name)
            return _failed(resource.name, exc)
        return _PreparedResource(name=resource.name, app_uuid=app_uuid, action=action)

    async def _create_or_update(
        self,
        resource: Resource,
        environment: RemoteEnvironment,
    ) -> tuple[str, ReconcileAction]:
        existing = await self._directory.find_application_by_name(resource.name, environment.id)
        if existing is None:
            manifest = self.manifest
            create_options = build_create_options(
                resource,
                project_uuid=manifest.project_id,
                server_uuid=self._options.server_uuid or manifest.server_uuid,
                environment_name=manifest.environment_name,
                environment_uuid=environment.uuid,
                destination_uuid=manifest.destination_id,
                docker_tag=self._options.docker_tag,
            )
            created = await self._directory.create_application(create_options)
            self._log.info("Created application %s (%s)", resource.name, created.uuid)
            return created.uuid, ReconcileAction.CREATED

        update_options = build_update_options(resource, docker_tag=self._options.docker_tag)
        if update_is_noop(update_options, existing):
            self._log.info("Application %s is up to date", resource.name)
            return existing.uuid, ReconcileAction.UNCHANGED

        await self._directory.update_application(existing.uuid, update_options)
        self._log.info("Updated application %s (%s)", resource.name, existing.uuid)
        return existing.uuid, ReconcileAction.UPDATED

    async def _sync_env_vars(self, resource: Resource, app_uuid: str) -> bool:
        """Push the resource's secret to the application; True when anything changed."""

        if resource.env_secret_name is None:
            return False
        secret = self._options.env_secrets.get(resource.env_secret_name)
        if not secret:
            self._log.debug(
                "No secret %s supplied for %s, skipping env sync",
                resource.env_secret_name,
                resource.name,
            )
            return False

        declared = parse_env_file(secret)
        plan = await sync_environment_variables(self._directory, app_uuid, declared)
        self._log.info(
            "Synced env vars for %s: %d declared, %d deleted, %d changed",
            resource.name,
            len(plan.upserts),
            len(plan.deletions),
            len(plan.changed_keys),
        )
        return plan.has_changes

    async def _trigger_all(
        self, prepared: list[_PreparedResource]
    ) -> list[_TriggeredResource | ReconcileResourceResult]:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(self._trigger(item)) for item in prepared]
        return [task.result() for task in tasks]

    async def _trigger(
        self, prepared: _PreparedResource
    ) -> _TriggeredResource | ReconcileResourceResult:
        try:
            deployment_uuid = await self._directory.trigger_deploy(prepared.app_uuid)
        except Exception as exc:
            self._log.exception("Failed to trigger deployment of %s", prepared.name)
            return _failed(prepared.name, exc)
        if deployment_uuid is None:
            self._log.error("No deployment was queued for %s", prepared.name)
            return ReconcileResourceResult(
                name=prepared.name,
                action=ReconcileAction.FAILED,
                error=f"Deploy of {prepared.app_uuid} returned no deployment uuid",
            )
        self._log.info("Triggered deployment %s for %s", deployment_uuid, prepared.name)
        return _TriggeredResource(prepared=prepared, deployment_uuid=deployment_uuid)

    async def _wait_all(self, triggered: list[_TriggeredResource]) -> list[ReconcileResourceResult]:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(self._wait(item)) for item in triggered]
        return [task.result() for task in tasks]

    async def _wait(self, triggered: _TriggeredResource) -> ReconcileResourceResult:
        name = triggered.prepared.name
        try:
            await wait_for_deployment(
                self._directory,
                triggered.deployment_uuid,
                poll_interval=self._options.poll_interval,
                timeout=self._options.deploy_timeout,
                logger=self._log,
            )
        except Exception as exc:
            self._log.error("Deployment of %s did not succeed: %s", name, exc)
            return _failed(name, exc, deployment_uuid=triggered.deployment_uuid)
        return ReconcileResourceResult(
            name=name,
            action=triggered.prepared.action,
            deployment_uuid=triggered.deployment_uuid,
        )

    async def _prune(self, environment: RemoteEnvironment) -> list[ReconcileResourceResult]:
        declared = self.manifest.resource_names
        try:
            applications = await self._directory.list_applications()
        except Exception as exc:
            self._log.exception("Failed to list applications for pruning")
            return [_failed("<prune>", exc)]

        results: list[ReconcileResourceResult] = []
        for application in applications:
            if application.environment_id != environment.id or application.name in declared:
                continue
            try:
                await self._directory.delete_application(application.uuid)
            except Exception as exc:
                self._log.exception("Failed to prune application %s", application.name)
                results.append(_failed(application.name, exc))
                continue
            self._log.info("Pruned application %s (%s)", application.name, application.uuid)
            results.append(
                ReconcileResourceResult(name=application.name, action=ReconcileAction.PRUNED)
            )
        return results


def _failed(
    name: str,
    exc: BaseException,
    *,
    deployment_uuid: str | None = None,
) -> ReconcileResourceResult:
    return ReconcileResourceResult(
        name=name,
        action=ReconcileAction.FAILED,
        deployment_uuid=deployment_uuid,
        error=str(exc) or type(exc).__name__,
    )


def _ensure_unique_names(manifest: Manifest) -> None:
    counts = Counter(resource.name for resource in manifest.resources)
    duplicates = [name for name, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateResourceError(duplicates)
