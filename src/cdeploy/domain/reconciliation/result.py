"""Outcome types reported by a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ReconcileAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    PRUNED = "pruned"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ReconcileResourceResult:
    name: str
    action: ReconcileAction
    deployment_uuid: str | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"name": self.name, "action": str(self.action)}
        if self.deployment_uuid is not None:
            data["deployment_uuid"] = self.deployment_uuid
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Aggregate of one run; ``success`` is False iff any resource failed."""

    success: bool
    total_created: int
    total_updated: int
    total_unchanged: int
    total_pruned: int
    total_failed: int
    resources: tuple[ReconcileResourceResult, ...]

    @classmethod
    def from_resources(cls, results: Iterable[ReconcileResourceResult]) -> ReconcileResult:
        resources = tuple(results)

        def count(action: ReconcileAction) -> int:
            return sum(1 for result in resources if result.action is action)

        total_failed = count(ReconcileAction.FAILED)
        return cls(
            success=total_failed == 0,
            total_created=count(ReconcileAction.CREATED),
            total_updated=count(ReconcileAction.UPDATED),
            total_unchanged=count(ReconcileAction.UNCHANGED),
            total_pruned=count(ReconcileAction.PRUNED),
            total_failed=total_failed,
            resources=resources,
        )

    def as_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "total_created": self.total_created,
            "total_updated": self.total_updated,
            "total_unchanged": self.total_unchanged,
            "total_pruned": self.total_pruned,
            "total_failed": self.total_failed,
            "resources": [result.as_dict() for result in self.resources],
        }
