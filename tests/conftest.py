from __future__ import annotations

import pytest

from cdeploy.domain.model import HealthCheck, Manifest
from tests.support.manifests import make_manifest, make_resource


@pytest.fixture
def health_check() -> HealthCheck:
    return HealthCheck(path="/health", port="8080")


@pytest.fixture
def manifest() -> Manifest:
    return make_manifest(
        make_resource("api", env_secret_name="COOLIFY_ENV_API"),
        make_resource("web"),
    )
