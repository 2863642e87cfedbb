"""Detect the user's shell profile and strip the kusion env lines from it."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from kusion_uninstall import console

if TYPE_CHECKING:
    from kusion_uninstall.config import UninstallConfig

log = logging.getLogger(__name__)

SOURCE_KUSION_CONTENT = "source $HOME/.kusion/.env"
SOURCE_KUSION_ANNOTATION_CONTENT = "# Source kusion env file"

DARWIN = "Darwin"

FISH_CONFIG = ".config/fish/config.fish"

FALLBACK_PROFILES: dict[str, tuple[str, ...]] = {
    DARWIN: (".profile", ".bash_profile", ".bashrc", ".zshrc", FISH_CONFIG),
    "*": (".profile", ".bashrc", ".bash_profile", ".zshrc", FISH_CONFIG),
}

CleanStatus = Literal["skipped", "not_detected", "missing", "cleared", "incomplete"]


@dataclass(frozen=True)
class ProfileCleanResult:
    """Outcome of clearing the kusion env lines from a profile."""

    status: CleanStatus
    profile: Path | None = None
    source_line: int | None = None
    annotation_line: int | None = None


def _first_existing(home: Path, names: tuple[str, ...]) -> Path | None:
    for name in names:
        candidate = home / name
        if candidate.is_file():
            return candidate
    return None


def detect_profile(shell: str, uname: str, *, profile: str = "", home: Path | None = None) -> Path | None:
    """Return the shell profile to edit, or ``None`` if none was found.

    An existing *profile* override wins. Otherwise the choice depends on the
    *shell* name and, for bash and unknown shells, on whether *uname* is
    ``Darwin``: macOS terminals open login shells, so ``.bash_profile`` is
    preferred there and ``.bashrc`` everywhere else.
    """
    if profile and Path(profile).is_file():
        console.info(f"Current profile: {profile}")
        return Path(profile)

    base = home or Path.home()
    if shell == "bash":
        if uname == DARWIN:
            return _first_existing(base, (".bash_profile", ".bashrc"))
        return _first_existing(base, (".bashrc", ".bash_profile"))
    if shell == "zsh":
        return base / ".zshrc"
    if shell == "fish":
        return base / FISH_CONFIG

    order = FALLBACK_PROFILES.get(uname, FALLBACK_PROFILES["*"])
    return _first_existing(base, order)


def _read_lines(path: Path) -> list[str]:
    with path.open(encoding="utf-8", errors="surrogateescape", newline="") as fh:
        return fh.readlines()


def _write_lines(path: Path, lines: list[str]) -> None:
    """Replace *path* with *lines* through a temp file in the same directory.

    Symlinked profiles are written at their target so the link survives.
    """
    target = path.resolve()
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as fh:
            fh.writelines(lines)
        shutil.copymode(target, tmp_path)
        tmp_path.replace(target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def _strip_eol(line: str) -> str:
    return line.removesuffix("\n").removesuffix("\r")


def contains_line(path: Path, target: str) -> bool:
    """Whether any line of *path* is exactly *target*."""
    return any(_strip_eol(line) == target for line in _read_lines(path))


def delete_first_line(path: Path, target: str) -> int | None:
    """Delete the first line of *path* equal to *target*.

    Returns the 1-based number of the deleted line, or ``None`` if no line
    matched (the file is then left untouched). Bytes that are not valid UTF-8
    are written back unchanged.
    """
    lines = _read_lines(path)
    for index, line in enumerate(lines):
        if _strip_eol(line) == target:
            del lines[index]
            _write_lines(path, lines)
            log.debug("deleted line %d of %s", index + 1, path)
            return index + 1
    return None


def _manual_delete_warning(target: str, path: Path) -> None:
    console.warn(f"Failed to delete {target} in {path}, please delete it manually.")


def _verify_deleted(path: Path, target: str) -> bool:
    if contains_line(path, target):
        _manual_delete_warning(target, path)
        return False
    console.info(f"Delete {target} in {path} succeeded.")
    return True


def _clear_line(path: Path, target: str) -> tuple[int | None, bool]:
    try:
        line_number = delete_first_line(path, target)
        return line_number, _verify_deleted(path, target)
    except OSError as exc:
        log.debug("editing %s failed", path, exc_info=True)
        console.warn(f"Could not edit {path}: {exc.strerror or exc}")
        _manual_delete_warning(target, path)
        return None, False


def delete_profile_source_content(profile: Path) -> ProfileCleanResult:
    """Remove the kusion source line and its annotation from *profile*.

    A profile that cannot be read or rewritten only produces warnings; the
    result is then ``incomplete``.
    """
    if not profile.is_file():
        console.warn(f"Profile {profile} does not exist. Skip clearing kusion env in user profile.")
        return ProfileCleanResult(status="missing", profile=profile)

    source_line, source_ok = _clear_line(profile, SOURCE_KUSION_CONTENT)
    annotation_line, annotation_ok = _clear_line(profile, SOURCE_KUSION_ANNOTATION_CONTENT)

    return ProfileCleanResult(
        status="cleared" if source_ok and annotation_ok else "incomplete",
        profile=profile,
        source_line=source_line,
        annotation_line=annotation_line,
    )


def clear_profile_source(config: UninstallConfig) -> ProfileCleanResult:
    """Detect the user's profile and clear the kusion env lines from it."""
    if config.skip_clear_source:
        console.info("Skip clearing kusion env in user profile.")
        return ProfileCleanResult(status="skipped")

    detected = detect_profile(config.shell, config.uname, profile=config.profile, home=config.user_home)
    if detected is None:
        console.warn(
            f"No supported user profile found. Already tried $PROFILE ({config.profile}), "
            "~/.bashrc, ~/.bash_profile, ~/.zshrc, ~/.profile, and ~/.config/fish/config.fish. "
            "Skip clearing kusion env in user profile."
        )
        return ProfileCleanResult(status="not_detected")

    console.info(f"Clearing kusion env in profile {detected}...")
    return delete_profile_source_content(detected)
