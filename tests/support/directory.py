"""In-memory application directory for engine tests."""

from __future__ import annotations

import itertools
from dataclasses import replace
from typing import TYPE_CHECKING

from cdeploy.domain.ports.directory import (
    CreatedApplication,
    Deployment,
    EnvVarEntry,
    RemoteApplication,
    RemoteEnvironment,
    RemoteEnvVar,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cdeploy.domain.options import CreateApplicationOptions, UpdateApplicationOptions

MUTATING_CALLS = frozenset(
    {
        "create_application",
        "update_application",
        "update_environment_variables",
        "delete_environment_variable",
        "delete_application",
        "trigger_deploy",
    }
)

_APPLICATION_FIELDS = frozenset(RemoteApplication.__dataclass_fields__)


class FakeDirectoryError(RuntimeError):
    pass


class FakeDirectory:
    """Keeps applications, env vars and deployments in dictionaries.

    ``deployment_statuses`` maps an application name to the statuses its
    deployments report on successive polls; the last status repeats.
    ``failures`` maps a call name to the application names (or uuids) it fails for.
    """

    def __init__(
        self,
        *,
        environments: Iterable[RemoteEnvironment] = (),
        applications: Iterable[RemoteApplication] = (),
        env_vars: dict[str, list[RemoteEnvVar]] | None = None,
        deployment_statuses: dict[str, list[str]] | None = None,
        failures: dict[str, set[str]] | None = None,
    ) -> None:
        self.environments = list(environments)
        self.applications = {application.uuid: application for application in applications}
        self.env_vars = {key: list(value) for key, value in (env_vars or {}).items()}
        self.deployment_statuses = deployment_statuses or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, str]] = []
        self._ids = itertools.count(1)
        self._deployments: dict[str, tuple[str, list[str]]] = {}

    @property
    def mutating_calls(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] in MUTATING_CALLS]

    def calls_named(self, name: str) -> list[str]:
        return [target for call, target in self.calls if call == name]

    def env_var_map(self, app_uuid: str) -> dict[str, str | None]:
        return {env_var.key: env_var.value for env_var in self.env_vars.get(app_uuid, [])}

    def deployment_name(self, deployment_uuid: str) -> str | None:
        deployment = self._deployments.get(deployment_uuid)
        return deployment[0] if deployment else None

    def application_named(self, name: str) -> RemoteApplication | None:
        for application in self.applications.values():
            if application.name == name:
                return application
        return None

    def _record(self, call: str, target: str, *names: str) -> None:
        self.calls.append((call, target))
        if self.failures.get(call, set()) & {target, *names}:
            raise FakeDirectoryError(f"{call} failed for {target}")

    async def list_applications(self) -> list[RemoteApplication]:
        self._record("list_applications", "*")
        return list(self.applications.values())

    async def find_application_by_name(
        self, name: str, environment_id: int
    ) -> RemoteApplication | None:
        self._record("find_application_by_name", name)
        for application in self.applications.values():
            if application.name == name and application.environment_id == environment_id:
                return application
        return None

    async def list_environments(self, project_uuid: str) -> list[RemoteEnvironment]:
        self._record("list_environments", project_uuid)
        return list(self.environments)

    async def find_environment_by_name(
        self, project_uuid: str, name: str
    ) -> RemoteEnvironment | None:
        self._record("find_environment_by_name", name)
        for environment in self.environments:
            if environment.name == name:
                return environment
        return None

    async def create_application(self, options: CreateApplicationOptions) -> CreatedApplication:
        self._record("create_application", options.name)
        environment = next(
            env for env in self.environments if env.uuid == options.environment_uuid
        )
        uuid = f"app-{next(self._ids)}"
        self.applications[uuid] = _apply_payload(
            RemoteApplication(uuid=uuid, name=options.name, environment_id=environment.id),
            options.to_payload(),
        )
        return CreatedApplication(uuid=uuid)

    async def update_application(self, uuid: str, options: UpdateApplicationOptions) -> None:
        self._record("update_application", uuid, options.name)
        self.applications[uuid] = _apply_payload(self.applications[uuid], options.to_payload())

    async def list_environment_variables(self, uuid: str) -> list[RemoteEnvVar]:
        self._record("list_environment_variables", uuid)
        return list(self.env_vars.get(uuid, []))

    async def update_environment_variables(self, uuid: str, env_vars: list[EnvVarEntry]) -> None:
        self._record("update_environment_variables", uuid)
        current = {env_var.key: env_var for env_var in self.env_vars.get(uuid, [])}
        for entry in env_vars:
            existing = current.get(entry.key)
            env_uuid = existing.uuid if existing else f"env-{next(self._ids)}"
            current[entry.key] = RemoteEnvVar(uuid=env_uuid, key=entry.key, value=entry.value)
        self.env_vars[uuid] = list(current.values())

    async def delete_environment_variable(self, app_uuid: str, env_var_uuid: str) -> None:
        self._record("delete_environment_variable", env_var_uuid)
        self.env_vars[app_uuid] = [
            env_var for env_var in self.env_vars.get(app_uuid, []) if env_var.uuid != env_var_uuid
        ]

    async def delete_application(self, uuid: str) -> None:
        application = self.applications.get(uuid)
        self._record("delete_application", uuid, application.name if application else "")
        self.applications.pop(uuid, None)

    async def trigger_deploy(self, uuid: str) -> str | None:
        name = self.applications[uuid].name
        self._record("trigger_deploy", uuid, name)
        deployment_uuid = f"deploy-{next(self._ids)}"
        statuses = list(self.deployment_statuses.get(name, ["finished"]))
        self._deployments[deployment_uuid] = (name, statuses)
        return deployment_uuid

    async def get_deployment(self, deployment_uuid: str) -> Deployment | None:
        self._record("get_deployment", deployment_uuid)
        if deployment_uuid not in self._deployments:
            return None
        _name, statuses = self._deployments[deployment_uuid]
        status = statuses.pop(0) if len(statuses) > 1 else statuses[0]
        return Deployment(deployment_uuid=deployment_uuid, status=status)


def _apply_payload(application: RemoteApplication, payload: dict[str, object]) -> RemoteApplication:
    changes = {key: value for key, value in payload.items() if key in _APPLICATION_FIELDS}
    if "domains" in payload:
        changes["fqdn"] = payload["domains"]
    return replace(application, **changes)  # type: ignore[arg-type]
