"""CLI for kusion-uninstall.

Uses cyclopts for the command-line interface. Every flag is optional and
overrides the matching environment variable.
"""

from __future__ import annotations

import sys
from pathlib import Path

from cyclopts import App

from kusion_uninstall.config import UninstallConfig
from kusion_uninstall.console import configure_logging

app = App(name="kusion-uninstall", help="Remove kusion and its shell profile hook")


@app.default
def uninstall(
    *,
    use_sudo: bool | None = None,
    profile: str | None = None,
    home_dir: Path | None = None,
    skip_clear_source: bool | None = None,
    verbose: bool = False,
) -> None:
    """Uninstall kusion.

    Parameters
    ----------
    use_sudo
        Remove the installation dir with sudo when not root (``USE_SUDO``).
    profile
        Shell profile to clean instead of the detected one (``PROFILE``).
    home_dir
        kusion installation dir (``KUSION_HOME_DIR``, default ``~/.kusion``).
    skip_clear_source
        Leave the shell profile untouched (``SKIP_CLEAR_SOURCE_KUSION_ENV``).
    verbose
        Print debug logging to stderr.
    """
    from kusion_uninstall.uninstaller import run_uninstall  # noqa: PLC0415

    configure_logging(verbose=verbose)
    config = UninstallConfig.from_env().with_overrides(
        use_sudo=use_sudo,
        profile=profile,
        home_dir=home_dir,
        skip_clear_source=skip_clear_source,
    )
    run_uninstall(config)


def main() -> None:
    """Entry point for the kusion-uninstall CLI."""
    app(sys.argv[1:])
