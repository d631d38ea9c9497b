"""Coolify API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

COOLIFY_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class CoolifyConfig:
    """Holds Coolify endpoint and credential values."""

    endpoint_url: str
    token: str
    resilience: ResilienceConfig

    def __repr__(self) -> str:
        return f"CoolifyConfig(endpoint_url={self.endpoint_url!r}, token='***')"


def build_resilience_config(endpoint_url: str, token: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="coolify",
        base_url=endpoint_url.rstrip("/"),
        timeout_seconds=COOLIFY_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        },
    )


def get_coolify_config(*, resilience: ResilienceConfig | None = None) -> CoolifyConfig:
    values = require_env_vars(("COOLIFY_ENDPOINT_URL", "COOLIFY_TOKEN"))
    endpoint_url = values["COOLIFY_ENDPOINT_URL"].strip().rstrip("/")
    token = values["COOLIFY_TOKEN"].strip()
    return CoolifyConfig(
        endpoint_url=endpoint_url,
        token=token,
        resilience=resilience or build_resilience_config(endpoint_url, token),
    )
