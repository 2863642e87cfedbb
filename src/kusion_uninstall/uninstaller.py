"""Uninstall kusion: remove its home dir, then clean the shell profile."""

from __future__ import annotations

from kusion_uninstall.config import UninstallConfig
from kusion_uninstall.profile import clear_profile_source
from kusion_uninstall.remover import remove_installation_dir
from kusion_uninstall.reporter import exit_report


def run_uninstall(config: UninstallConfig | None = None) -> None:
    """Run every uninstall step once, in order.

    The first fatal error aborts the remaining steps; the outcome is reported
    either way and a failure leaves through :class:`SystemExit`.
    """
    with exit_report():
        config = config or UninstallConfig.from_env()
        remove_installation_dir(config)
        clear_profile_source(config)
