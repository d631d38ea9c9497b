"""Shared logging helpers for cdeploy."""

from __future__ import annotations

import logging

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Set up root logging for a CLI run.

    Output is one timestamped line per record, which reads well in CI job logs.
    ``force=True`` replaces handlers installed by an earlier call.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    # request lines from httpx are noise next to our own API logging
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def parse_log_level(value: str) -> int:
    """Translate a ``LOG_LEVEL`` style name into a ``logging`` level."""

    try:
        return _LEVELS[value.strip().lower()]
    except KeyError:
        choices = ", ".join(sorted(_LEVELS))
        raise ValueError(f"Unknown log level {value!r} (expected one of: {choices})") from None
