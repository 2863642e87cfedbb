"""Uninstall settings resolved from the environment."""

from __future__ import annotations

import dataclasses
import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePath

DEFAULT_HOME_DIRNAME = ".kusion"


def _flag(value: str) -> bool:
    return value == "true"


@dataclass(frozen=True)
class UninstallConfig:
    """Settings for a single uninstall run."""

    use_sudo: bool
    profile: str
    home_dir: Path
    skip_clear_source: bool
    user_home: Path
    shell: str
    uname: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> UninstallConfig:
        """Build a config from *environ* (``os.environ`` by default).

        Empty variables are treated as unset. Switches are on only for the
        literal value ``"true"``.
        """
        env = os.environ if environ is None else environ
        user_home = Path(env["HOME"]) if env.get("HOME") else Path.home()
        home_dir = env.get("KUSION_HOME_DIR") or str(user_home / DEFAULT_HOME_DIRNAME)
        return cls(
            use_sudo=_flag(env.get("USE_SUDO") or "false"),
            profile=env.get("PROFILE") or "",
            home_dir=Path(home_dir),
            skip_clear_source=_flag(env.get("SKIP_CLEAR_SOURCE_KUSION_ENV") or "false"),
            user_home=user_home,
            shell=PurePath(env.get("SHELL") or "").name,
            uname=platform.system(),
        )

    def with_overrides(self, **values: object) -> UninstallConfig:
        """Return a copy with every non-``None`` value in *values* applied."""
        changes = {key: value for key, value in values.items() if value is not None}
        if "home_dir" in changes:
            changes["home_dir"] = Path(changes["home_dir"])
        return dataclasses.replace(self, **changes)
