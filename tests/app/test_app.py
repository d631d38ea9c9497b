from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from cdeploy.app import apply_manifest, describe_state
from cdeploy.domain.errors import EnvironmentNotFoundError
from cdeploy.domain.ports.directory import RemoteApplication
from cdeploy.domain.reconciliation import ReconcileAction
from tests.support.directory import FakeDirectory
from tests.support.manifests import PRODUCTION, STAGING, make_manifest, make_resource

if TYPE_CHECKING:
    from cdeploy.domain.model import Manifest


def test_apply_manifest_runs_the_reconciler(manifest: Manifest) -> None:
    directory = FakeDirectory(environments=[PRODUCTION])

    result = apply_manifest(
        manifest,
        docker_tag="v1",
        env_secrets={"COOLIFY_ENV_API": "A=1"},
        directory=directory,
        poll_interval=0,
    )

    assert result.success
    assert result.total_created == 2
    assert [resource.action for resource in result.resources] == [
        ReconcileAction.CREATED,
        ReconcileAction.CREATED,
    ]
    api = directory.application_named("api")
    assert api is not None
    assert api.docker_registry_image_tag == "v1"
    assert directory.env_var_map(api.uuid) == {"A": "1"}


def test_apply_manifest_dry_run_leaves_directory_untouched(manifest: Manifest) -> None:
    directory = FakeDirectory(environments=[PRODUCTION])

    result = apply_manifest(
        manifest,
        docker_tag="v1",
        env_secrets={"COOLIFY_ENV_API": "A=1"},
        dry_run=True,
        directory=directory,
        poll_interval=0,
    )

    assert result.success
    assert result.total_created == 2
    assert directory.mutating_calls == []
    assert directory.applications == {}


def test_describe_state_reports_declared_resources_in_environment() -> None:
    manifest = make_manifest(make_resource("api"), make_resource("web"))
    directory = FakeDirectory(
        environments=[PRODUCTION, STAGING],
        applications=[
            RemoteApplication(
                uuid="api-uuid",
                name="api",
                environment_id=PRODUCTION.id,
                status="running:healthy",
                extra={
                    "uuid": "api-uuid",
                    "name": "api",
                    "status": "running:healthy",
                    "build_pack": "dockerimage",
                },
            ),
            RemoteApplication(uuid="web-staging", name="web", environment_id=STAGING.id),
        ],
    )

    states = describe_state(manifest, directory=directory)

    assert states == [
        {"exists": True, "uuid": "api-uuid", "name": "api", "status": "running:healthy"},
        {"name": "web", "exists": False},
    ]


def test_describe_state_without_raw_payload_uses_snapshot_fields() -> None:
    manifest = make_manifest(make_resource("api"))
    directory = FakeDirectory(
        environments=[PRODUCTION],
        applications=[
            RemoteApplication(
                uuid="api-uuid",
                name="api",
                environment_id=PRODUCTION.id,
                docker_registry_image_tag="v3",
            )
        ],
    )

    (state,) = describe_state(manifest, directory=directory)

    assert state["exists"] is True
    assert state["uuid"] == "api-uuid"
    assert state["docker_registry_image_tag"] == "v3"


def test_describe_state_requires_environment() -> None:
    manifest = make_manifest(make_resource("api"), environment_name="preview")

    with pytest.raises(EnvironmentNotFoundError):
        describe_state(manifest, directory=FakeDirectory(environments=[PRODUCTION]))
