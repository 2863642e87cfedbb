"""Removal of the kusion installation directory."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import TYPE_CHECKING

from kusion_uninstall import console
from kusion_uninstall.errors import DirectoryRemovalError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from kusion_uninstall.config import UninstallConfig

log = logging.getLogger(__name__)


def _effective_uid() -> int:
    return os.geteuid()


def needs_elevation(config: UninstallConfig) -> bool:
    """Whether commands must be prefixed with ``sudo``."""
    return config.use_sudo and _effective_uid() != 0


def run_as_root(argv: Sequence[str], config: UninstallConfig) -> None:
    """Run *argv*, through ``sudo`` when elevation is requested and needed.

    Raises :class:`subprocess.CalledProcessError` on a non-zero exit status.
    """
    cmd = list(argv)
    if needs_elevation(config):
        cmd = ["sudo", *cmd]
    log.debug("running %s", cmd)
    subprocess.run(cmd, check=True)


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    else:
        log.debug("%s does not exist, nothing to remove", path)


def remove_installation_dir(config: UninstallConfig) -> None:
    """Delete ``config.home_dir`` recursively.

    Raises :class:`DirectoryRemovalError` if the directory is still there
    afterwards.
    """
    home_dir = config.home_dir
    console.info(f"Removing kusion installation dir {home_dir}...")
    if needs_elevation(config):
        run_as_root(["rm", "-rf", str(home_dir)], config)
    else:
        _remove_path(home_dir)

    if home_dir.is_dir():
        console.error("Removing kusion installation dir failed.")
        raise DirectoryRemovalError(home_dir)
