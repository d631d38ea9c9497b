"""Manifest loading and schema validation."""

from __future__ import annotations

from .loader import ManifestError, load_manifest, parse_manifest
from .schema import HealthCheckModel, ManifestModel, ResourceModel

__all__ = [
    "HealthCheckModel",
    "ManifestError",
    "ManifestModel",
    "ResourceModel",
    "load_manifest",
    "parse_manifest",
]
