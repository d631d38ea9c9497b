"""HTTP client for the Coolify API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from cdeploy.adapters.http_resilience import ResilientClient
from cdeploy.domain.ports.directory import CreatedApplication

from .schema import CreateApplicationResponse, DeployResponse, EnvVarPayload, ErrorResponse
from .translator import parse_application, parse_deployment, parse_env_var, parse_environment

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    import httpx

    from cdeploy.config.coolify import CoolifyConfig
    from cdeploy.config.http_resilience import ResilienceConfig
    from cdeploy.domain.options import CreateApplicationOptions, UpdateApplicationOptions
    from cdeploy.domain.ports.directory import (
        ApplicationDirectory,
        Deployment,
        EnvVarEntry,
        RemoteApplication,
        RemoteEnvironment,
        RemoteEnvVar,
    )

log = getLogger(__name__)

API_PREFIX = "/api/v1"
_SCOPE_HINT = " - Check your API token permissions (scope)."


class ApiError(RuntimeError):
    """Raised when the Coolify API answers with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class CoolifyClient:
    """Coolify implementation of the application directory.

    Use as an async context manager so the underlying connection pool is closed::

        async with CoolifyClient(config=config) as client:
            apps = await client.list_applications()
    """

    def __init__(
        self,
        *,
        config: CoolifyConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._http = (client_factory or _default_client_factory)(config.resilience)

    async def __aenter__(self) -> CoolifyClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_applications(self) -> list[RemoteApplication]:
        payload = await self._request("GET", "/applications")
        return [parse_application(item) for item in _as_list(payload)]

    async def find_application_by_name(
        self, name: str, environment_id: int
    ) -> RemoteApplication | None:
        # names are only unique per environment
        for application in await self.list_applications():
            if application.name == name and application.environment_id == environment_id:
                return application
        return None

    async def list_environments(self, project_uuid: str) -> list[RemoteEnvironment]:
        payload = await self._request("GET", f"/projects/{project_uuid}/environments")
        return [parse_environment(item) for item in _as_list(payload)]

    async def find_environment_by_name(
        self, project_uuid: str, name: str
    ) -> RemoteEnvironment | None:
        for environment in await self.list_environments(project_uuid):
            if environment.name == name:
                log.debug("Found environment %s in project %s", name, project_uuid)
                return environment
        return None

    async def create_application(self, options: CreateApplicationOptions) -> CreatedApplication:
        log.info("Creating Docker image application %s", options.name)
        payload = await self._request(
            "POST", "/applications/dockerimage", json=options.to_payload()
        )
        if payload is None:
            raise ApiError("Create application returned an empty response")
        response = CreateApplicationResponse.model_validate(payload)
        return CreatedApplication(uuid=response.uuid)

    async def update_application(self, uuid: str, options: UpdateApplicationOptions) -> None:
        log.info("Updating application %s (%s)", options.name, uuid)
        log.debug("Update payload for %s: %s", uuid, options.to_payload())
        await self._request("PATCH", f"/applications/{uuid}", json=options.to_payload())

    async def list_environment_variables(self, uuid: str) -> list[RemoteEnvVar]:
        payload = await self._request("GET", f"/applications/{uuid}/envs")
        env_vars = [EnvVarPayload.model_validate(item) for item in _as_list(payload)]
        return [parse_env_var(env_var) for env_var in env_vars if not env_var.is_preview]

    async def update_environment_variables(self, uuid: str, env_vars: list[EnvVarEntry]) -> None:
        log.info("Updating %d environment variables on %s", len(env_vars), uuid)
        data = [{"key": env_var.key, "value": env_var.value} for env_var in env_vars]
        await self._request("PATCH", f"/applications/{uuid}/envs/bulk", json={"data": data})

    async def delete_environment_variable(self, app_uuid: str, env_var_uuid: str) -> None:
        log.info("Deleting environment variable %s from %s", env_var_uuid, app_uuid)
        await self._request(
            "DELETE", f"/applications/{app_uuid}/envs/{env_var_uuid}", missing_ok=True
        )

    async def delete_application(self, uuid: str) -> None:
        log.info("Deleting application %s", uuid)
        # a retried DELETE whose first attempt went through answers 404
        await self._request("DELETE", f"/applications/{uuid}", missing_ok=True)

    async def trigger_deploy(self, uuid: str) -> str | None:
        """Queue a deployment of ``uuid`` and return the deployment uuid, if any."""

        log.info("Triggering deployment of %s", uuid)
        # the API accepts either uuid or tag, never both
        payload = await self._request("POST", "/deploy", json={"uuid": uuid})
        if payload is None:
            return None
        response = DeployResponse.model_validate(payload)
        for deployment in response.deployments:
            if deployment.deployment_uuid:
                return deployment.deployment_uuid
        return None

    async def get_deployment(self, deployment_uuid: str) -> Deployment | None:
        payload = await self._request(
            "GET", f"/deployments/{deployment_uuid}", missing_ok=True
        )
        if payload is None:
            return None
        return parse_deployment(payload, fallback_uuid=deployment_uuid)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: object | None = None,
        missing_ok: bool = False,
    ) -> object | None:
        url = f"{API_PREFIX}{path}"
        log.debug("Coolify request %s %s (body=%s)", method, url, json is not None)
        if json is None:
            response = await self._http.request(method, url)
        else:
            response = await self._http.request(method, url, json=json)

        if missing_ok and response.status_code == 404:
            return None
        if response.is_error:
            message = _error_message(response)
            log.error(
                "Coolify request %s %s failed (%s): %s",
                method,
                url,
                response.status_code,
                message,
            )
            raise ApiError(message, status_code=response.status_code)

        if not response.content or not _is_json(response):
            return None
        return response.json()


def _is_json(response: httpx.Response) -> bool:
    return "application/json" in response.headers.get("content-type", "")


def _error_message(response: httpx.Response) -> str:
    message: str | None = None
    if response.content and _is_json(response):
        try:
            message = ErrorResponse.model_validate(response.json()).message
        except ValueError:
            message = None
    if not message:
        message = f"HTTP {response.status_code}: {response.reason_phrase}"
    if response.status_code in {401, 403}:
        message += _SCOPE_HINT
    return message


def _as_list(payload: object | None) -> list[object]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ApiError("Unexpected Coolify response payload (expected a list)")
    return payload


if TYPE_CHECKING:
    _directory_check: type[ApplicationDirectory] = CoolifyClient
