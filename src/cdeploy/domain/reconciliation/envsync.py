"""Environment-variable synchronisation for a single application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cdeploy.domain.ports.directory import EnvVarEntry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from cdeploy.domain.ports.directory import ApplicationDirectory, RemoteEnvVar


@dataclass(frozen=True, slots=True)
class EnvVarPlan:
    upserts: tuple[EnvVarEntry, ...]
    deletions: tuple[RemoteEnvVar, ...]
    changed_keys: frozenset[str]

    @property
    def has_changes(self) -> bool:
        return bool(self.changed_keys)


def plan_env_var_sync(declared: Mapping[str, str], remote: list[RemoteEnvVar]) -> EnvVarPlan:
    """Diff declared variables against the remote set by key.

    Every declared key is upserted; remote keys outside the declared set are
    deleted. ``changed_keys`` lists the keys whose remote value actually differs.
    """

    remote_values: dict[str, str | None] = {}
    for env_var in remote:
        remote_values.setdefault(env_var.key, env_var.value)

    upserts = tuple(EnvVarEntry(key=key, value=value) for key, value in declared.items())
    deletions = tuple(env_var for env_var in remote if env_var.key not in declared)

    changed = {key for key, value in declared.items() if remote_values.get(key) != value}
    changed.update(env_var.key for env_var in deletions)
    return EnvVarPlan(upserts=upserts, deletions=deletions, changed_keys=frozenset(changed))


async def sync_environment_variables(
    directory: ApplicationDirectory,
    app_uuid: str,
    declared: Mapping[str, str],
) -> EnvVarPlan:
    remote = await directory.list_environment_variables(app_uuid)
    plan = plan_env_var_sync(declared, remote)

    if plan.upserts:
        await directory.update_environment_variables(app_uuid, list(plan.upserts))
    for env_var in plan.deletions:
        await directory.delete_environment_variable(app_uuid, env_var.uuid)
    return plan
