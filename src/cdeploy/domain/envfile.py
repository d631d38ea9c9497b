"""Parser for ``.env`` formatted secret blobs."""

from __future__ import annotations

import re

from .errors import EnvFileParseError

_COMMENT = re.compile(r"^\s*#")
_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def parse_env_file(text: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines into an ordered mapping.

    Blank lines and ``#`` comments are skipped. A value wrapped in matching single
    or double quotes has the quotes stripped and is otherwise taken literally; no
    escape sequences are interpreted. When a key repeats, the last value wins.
    """

    values: dict[str, str] = {}
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or _COMMENT.match(line):
            continue

        key, separator, value = line.partition("=")
        if not separator:
            raise EnvFileParseError("expected KEY=VALUE", line_number=line_number)

        key = key.strip()
        if not _KEY.match(key):
            raise EnvFileParseError(f"invalid variable name {key!r}", line_number=line_number)

        values[key] = _unquote(value.strip())
    return values


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value
