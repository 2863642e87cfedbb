"""Final success/failure report, emitted on every exit path."""

from __future__ import annotations

import logging
import subprocess
from contextlib import contextmanager
from typing import TYPE_CHECKING

from kusion_uninstall import console
from kusion_uninstall.errors import UninstallError

if TYPE_CHECKING:
    from collections.abc import Iterator

log = logging.getLogger(__name__)

SUPPORT_URL = "https://kusionstack.io"

SUCCESS_MESSAGE = f"Uninstall kusion succeeded. Hope you can use kusion again, visit {SUPPORT_URL} for more information."
FAILURE_MESSAGE = f"Failed to uninstall kusion. Please go to {SUPPORT_URL} for more support."

_INTERRUPTED = 130

_EXPECTED = (UninstallError, OSError, subprocess.CalledProcessError, KeyboardInterrupt, SystemExit)


def _exit_status(exc: BaseException) -> int:
    if isinstance(exc, SystemExit):
        code = exc.code
        if code is None:
            return 0
        return code if isinstance(code, int) else 1
    if isinstance(exc, UninstallError):
        return exc.exit_code
    if isinstance(exc, subprocess.CalledProcessError):
        return exc.returncode or 1
    if isinstance(exc, KeyboardInterrupt):
        return _INTERRUPTED
    return 1


def report(status: int) -> None:
    """Print the final message for *status*."""
    if status == 0:
        console.info(SUCCESS_MESSAGE)
    else:
        console.error(FAILURE_MESSAGE)


@contextmanager
def exit_report() -> Iterator[None]:
    """Report the outcome of the wrapped block and preserve its exit status.

    On failure the final message is printed and :class:`SystemExit` is raised
    with the status of the failing step. Unexpected exceptions are reported
    and then re-raised unchanged.
    """
    try:
        yield
    except BaseException as exc:
        status = _exit_status(exc)
        if status == 0:
            report(0)
            raise
        log.debug("uninstall aborted", exc_info=True)
        if isinstance(exc, OSError):
            console.error(str(exc))
        report(status)
        if not isinstance(exc, _EXPECTED):
            raise
        raise SystemExit(status) from exc
    report(0)
