"""Severity-tagged diagnostics on stderr."""

from __future__ import annotations

import logging
import sys

_TAGS: dict[str, str] = {
    "info": "\033[1;32mInfo\033[0m",
    "warn": "\033[1;33mWarn\033[0m",
    "error": "\033[1;31mError\033[0m",
}


def info(msg: str) -> None:
    """Report progress."""
    _emit("info", msg)


def warn(msg: str) -> None:
    """Report a problem that does not stop the uninstall."""
    _emit("warn", msg)


def error(msg: str) -> None:
    """Report a failure."""
    _emit("error", msg)


def configure_logging(*, verbose: bool = False) -> None:
    """Send debug records to stderr when *verbose* is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _emit(level: str, msg: str) -> None:
    """Print wrapper to keep ruff T20 suppression in one place."""
    print(f"{_TAGS[level]}: {msg}", file=sys.stderr)  # noqa: T201
