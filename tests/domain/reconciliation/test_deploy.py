from __future__ import annotations

import asyncio

import pytest

from cdeploy.domain.errors import DeploymentFailedError, DeploymentTimeoutError
from cdeploy.domain.ports.directory import Deployment
from cdeploy.domain.reconciliation.deploy import wait_for_deployment


class _ScriptedDeployments:
    def __init__(self, statuses: list[str | None]) -> None:
        self._statuses = statuses
        self.polls = 0

    async def get_deployment(self, deployment_uuid: str) -> Deployment | None:
        self.polls += 1
        status = self._statuses.pop(0) if len(self._statuses) > 1 else self._statuses[0]
        if status is None:
            return None
        return Deployment(deployment_uuid=deployment_uuid, status=status)


def test_wait_for_deployment_polls_until_finished() -> None:
    directory = _ScriptedDeployments(["queued", None, "in_progress", "finished"])

    deployment = asyncio.run(
        wait_for_deployment(directory, "deploy-1", poll_interval=0, timeout=1)  # type: ignore[arg-type]
    )

    assert deployment.status == "finished"
    assert directory.polls == 4


@pytest.mark.parametrize("status", ["failed", "cancelled-by-user"])
def test_wait_for_deployment_raises_on_failure(status: str) -> None:
    directory = _ScriptedDeployments(["in_progress", status])

    with pytest.raises(DeploymentFailedError) as excinfo:
        asyncio.run(
            wait_for_deployment(directory, "deploy-1", poll_interval=0, timeout=1)  # type: ignore[arg-type]
        )

    assert excinfo.value.status == status
    assert "deploy-1" in str(excinfo.value)


def test_wait_for_deployment_times_out() -> None:
    directory = _ScriptedDeployments(["in_progress"])

    with pytest.raises(DeploymentTimeoutError, match="timed out"):
        asyncio.run(
            wait_for_deployment(directory, "deploy-1", poll_interval=0.01, timeout=0.05)  # type: ignore[arg-type]
        )

    assert directory.polls >= 1
