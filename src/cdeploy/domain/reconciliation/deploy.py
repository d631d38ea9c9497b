"""Deployment polling."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from cdeploy.domain.errors import DeploymentFailedError, DeploymentTimeoutError

if TYPE_CHECKING:
    from cdeploy.domain.ports.directory import ApplicationDirectory, Deployment

FINISHED_STATUS = "finished"
FAILED_STATUSES = frozenset({"failed", "cancelled", "cancelled-by-user"})

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_DEPLOY_TIMEOUT = 300.0

log = logging.getLogger(__name__)


async def wait_for_deployment(
    directory: ApplicationDirectory,
    deployment_uuid: str,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_DEPLOY_TIMEOUT,
    logger: logging.Logger | None = None,
) -> Deployment:
    """Poll ``deployment_uuid`` until it finishes, fails or ``timeout`` elapses.

    Raises :class:`DeploymentFailedError` for a failed or cancelled deployment and
    :class:`DeploymentTimeoutError` when the deadline passes first. A deployment the
    platform does not know about yet is polled again.
    """

    logger = logger or log
    logger.info("Waiting for deployment %s to finish", deployment_uuid)
    try:
        async with asyncio.timeout(timeout):
            while True:
                deployment = await directory.get_deployment(deployment_uuid)
                if deployment is None:
                    logger.warning("Deployment %s not found, retrying", deployment_uuid)
                else:
                    logger.debug(
                        "Deployment %s status: %s", deployment_uuid, deployment.status
                    )
                    if deployment.status == FINISHED_STATUS:
                        logger.info("Deployment %s finished", deployment_uuid)
                        return deployment
                    if deployment.status in FAILED_STATUSES:
                        raise DeploymentFailedError(deployment_uuid, deployment.status)
                await asyncio.sleep(poll_interval)
    except TimeoutError:
        raise DeploymentTimeoutError(deployment_uuid, timeout) from None
