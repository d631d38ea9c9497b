"""Reconciliation of declared resources against a remote application directory."""

from __future__ import annotations

from .deploy import wait_for_deployment
from .dry_run import DRY_RUN_APPLICATION_UUID, DRY_RUN_DEPLOYMENT_UUID, DryRunDirectory
from .engine import Reconciler, ReconcilerOptions
from .envsync import EnvVarPlan, plan_env_var_sync, sync_environment_variables
from .result import ReconcileAction, ReconcileResourceResult, ReconcileResult

__all__ = [
    "DRY_RUN_APPLICATION_UUID",
    "DRY_RUN_DEPLOYMENT_UUID",
    "DryRunDirectory",
    "EnvVarPlan",
    "ReconcileAction",
    "ReconcileResourceResult",
    "ReconcileResult",
    "Reconciler",
    "ReconcilerOptions",
    "plan_env_var_sync",
    "sync_environment_variables",
    "wait_for_deployment",
]
