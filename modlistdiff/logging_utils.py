from __future__ import annotations

import sys
from typing import TextIO

LEVEL_DEFAULT = "info"
# Levels that go to stderr so rendered diff text on stdout can be piped as is.
STDERR_LEVELS = frozenset({"warn", "error"})


def _normalize_level(level: str | None) -> str:
    if not level:
        return LEVEL_DEFAULT
    return level.strip().lower() or LEVEL_DEFAULT


def _stream_for(level: str) -> TextIO:
    return sys.stderr if level in STDERR_LEVELS else sys.stdout


def log(message: str, level: str = LEVEL_DEFAULT, indent: int = 0) -> None:
    normalized = _normalize_level(level)
    prefix = " " * max(indent, 0)
    print(f"{prefix}[{normalized}] {message}", file=_stream_for(normalized))


def log_info(message: str, indent: int = 0) -> None:
    log(message, "info", indent)


def log_warn(message: str, indent: int = 0) -> None:
    log(message, "warn", indent)


def log_error(message: str, indent: int = 0) -> None:
    log(message, "error", indent)


def log_diff(message: str, indent: int = 0) -> None:
    """One line of the per-mod difference listing."""
    log(message, "diff", indent)


def log_ok(message: str, indent: int = 0) -> None:
    log(message, "ok", indent)


__all__ = ["log", "log_info", "log_warn", "log_error", "log_diff", "log_ok"]
