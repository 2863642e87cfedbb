"""Errors raised while uninstalling kusion."""

from __future__ import annotations

from pathlib import Path


class UninstallError(Exception):
    """Base class for fatal uninstall failures."""

    exit_code = 1


class DirectoryRemovalError(UninstallError):
    """The installation directory still exists after removing it."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Installation dir {path} still exists after removal")
