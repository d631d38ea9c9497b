# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cdeploy import __version__
from cdeploy.adapters.manifest import load_manifest
from cdeploy.app import apply_manifest, describe_state
from cdeploy.common.logging import parse_log_level
from cdeploy.config import ConfigurationError, configure_logging, get_deploy_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from cdeploy.config import DeployConfig
    from cdeploy.domain.model import Manifest

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cdeploy",
        description="Deploy and manage resources in Coolify using a manifest file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-m",
        "--manifest",
        type=str,
        help="Path to coolify.manifest.json (defaults to MANIFEST_PATH)",
    )
    parser.add_argument(
        "-s",
        "--server-uuid",
        type=str,
        help="Coolify server UUID (overrides the manifest)",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        default=None,
        help="Predict changes without modifying Coolify (defaults to DRY_RUN)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level: debug, info, warning, error (defaults to LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    apply = subparsers.add_parser("apply", help="Apply the manifest to Coolify")
    apply.add_argument(
        "-t",
        "--tag",
        type=str,
        help='Docker image tag to deploy, e.g. "latest" or "v1.0.0" (defaults to DOCKER_IMAGE_TAG)',
    )
    apply.add_argument(
        "--deploy-timeout",
        type=float,
        help="Seconds to wait for each deployment before failing it (default: 300)",
    )

    subparsers.add_parser("state", help="Print the current state of the manifest's resources")

    return parser.parse_args(list(argv))


def _run_apply(
    args: argparse.Namespace,
    manifest: Manifest,
    config: DeployConfig,
    *,
    deploy_timeout: float,
) -> bool:
    dry_run = config.dry_run if args.dry_run is None else args.dry_run
    result = apply_manifest(
        manifest,
        docker_tag=args.tag or config.docker_tag,
        env_secrets=config.env_secrets,
        dry_run=dry_run,
        server_uuid=args.server_uuid,
        poll_interval=config.poll_interval_seconds,
        deploy_timeout=deploy_timeout,
    )
    for resource in result.resources:
        if resource.error:
            log.error("%s: %s (%s)", resource.name, resource.action, resource.error)
        else:
            log.info("%s: %s", resource.name, resource.action)
    log.info(
        "Reconciliation complete: success=%s, created=%s, updated=%s, pruned=%s, failed=%s",
        result.success,
        result.total_created,
        result.total_updated,
        result.total_pruned,
        result.total_failed,
    )
    if not result.success:
        log.error("Reconciliation failed with errors")
    return result.success


def _deploy_timeout(args: argparse.Namespace, config: DeployConfig) -> float:
    # only the apply subcommand defines --deploy-timeout
    value = getattr(args, "deploy_timeout", None)
    deploy_timeout = config.deploy_timeout_seconds if value is None else value
    if deploy_timeout <= 0:
        raise ValueError(f"Deploy timeout must be positive, got {deploy_timeout}")
    return deploy_timeout


def _run_state(args: argparse.Namespace, manifest: Manifest, config: DeployConfig) -> bool:
    dry_run = config.dry_run if args.dry_run is None else args.dry_run
    if dry_run:
        names = ", ".join(resource.name for resource in manifest.resources)
        print(
            f"[DRY RUN] Would introspect environment '{manifest.environment_name}' in project "
            f"'{manifest.project_id}' for the following resources: {names}"
        )
        return True
    print(json.dumps(describe_state(manifest), indent=2, default=str))
    return True


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        config = get_deploy_config()
        level = parse_log_level(parsed_args.log_level or config.log_level)
        manifest_path = parsed_args.manifest or config.manifest_path
        if not manifest_path:
            raise ValueError("Manifest path is required (use --manifest or MANIFEST_PATH)")  # noqa: TRY301
        deploy_timeout = _deploy_timeout(parsed_args, config)
    except (ValueError, ConfigurationError):
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    # state prints JSON on stdout, keep the log quiet
    if parsed_args.command == "state":
        level = max(level, logging.WARNING)
    configure_logging(level=level)

    try:
        manifest = load_manifest(manifest_path)
        log.info(
            "Manifest loaded: project=%s, environment=%s, resources=%d",
            manifest.project_id,
            manifest.environment_name,
            len(manifest.resources),
        )
        if parsed_args.command == "apply":
            succeeded = _run_apply(
                parsed_args, manifest, config, deploy_timeout=deploy_timeout
            )
        elif parsed_args.command == "state":
            succeeded = _run_state(parsed_args, manifest, config)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)

    if not succeeded:
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(130)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
