"""Tests for kusion_uninstall.remover module."""

from __future__ import annotations

import subprocess

import pytest

from kusion_uninstall.config import UninstallConfig
from kusion_uninstall.errors import DirectoryRemovalError
from kusion_uninstall.remover import needs_elevation, remove_installation_dir, run_as_root


@pytest.fixture
def config(tmp_path) -> UninstallConfig:
    return UninstallConfig(
        use_sudo=False,
        profile="",
        home_dir=tmp_path / ".kusion",
        skip_clear_source=True,
        user_home=tmp_path,
        shell="bash",
        uname="Linux",
    )


@pytest.fixture
def recorded_commands(monkeypatch) -> list[list[str]]:
    """Capture subprocess.run calls instead of executing them."""
    calls: list[list[str]] = []

    def fake_run(cmd, *, check):
        assert check is True
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr("kusion_uninstall.remover.subprocess.run", fake_run)
    return calls


class TestNeedsElevation:
    def test_disabled_by_default(self, config, monkeypatch):
        monkeypatch.setattr("kusion_uninstall.remover._effective_uid", lambda: 1000)
        assert needs_elevation(config) is False

    def test_enabled_for_regular_user(self, config, monkeypatch):
        monkeypatch.setattr("kusion_uninstall.remover._effective_uid", lambda: 1000)
        assert needs_elevation(config.with_overrides(use_sudo=True)) is True

    def test_not_needed_for_root(self, config, monkeypatch):
        monkeypatch.setattr("kusion_uninstall.remover._effective_uid", lambda: 0)
        assert needs_elevation(config.with_overrides(use_sudo=True)) is False


class TestRunAsRoot:
    def test_prefixes_sudo(self, config, monkeypatch, recorded_commands):
        monkeypatch.setattr("kusion_uninstall.remover._effective_uid", lambda: 1000)
        run_as_root(["rm", "-rf", "/opt/kusion"], config.with_overrides(use_sudo=True))
        assert recorded_commands == [["sudo", "rm", "-rf", "/opt/kusion"]]

    def test_runs_plain_without_sudo(self, config, recorded_commands):
        run_as_root(["true"], config)
        assert recorded_commands == [["true"]]

    def test_failure_propagates(self, config, monkeypatch):
        def failing_run(cmd, *, check):
            raise subprocess.CalledProcessError(1, cmd)

        monkeypatch.setattr("kusion_uninstall.remover.subprocess.run", failing_run)
        with pytest.raises(subprocess.CalledProcessError):
            run_as_root(["false"], config)


class TestRemoveInstallationDir:
    def test_removes_directory_tree(self, config, capsys):
        (config.home_dir / "bin").mkdir(parents=True)
        (config.home_dir / "bin" / "kusion").write_text("binary", encoding="utf-8")
        (config.home_dir / ".env").write_text("export PATH=...", encoding="utf-8")

        remove_installation_dir(config)
        assert not config.home_dir.exists()
        assert f"Removing kusion installation dir {config.home_dir}" in capsys.readouterr().err

    def test_missing_directory_is_fine(self, config):
        remove_installation_dir(config)
        assert not config.home_dir.exists()

    def test_removes_symlink_not_target(self, tmp_path, config):
        target = tmp_path / "real"
        target.mkdir()
        (target / "keep").write_text("x", encoding="utf-8")
        config.home_dir.symlink_to(target)

        remove_installation_dir(config)
        assert not config.home_dir.exists()
        assert (target / "keep").exists()

    def test_uses_sudo_rm_when_elevated(self, config, monkeypatch, recorded_commands):
        monkeypatch.setattr("kusion_uninstall.remover._effective_uid", lambda: 1000)

        remove_installation_dir(config.with_overrides(use_sudo=True))
        assert recorded_commands == [["sudo", "rm", "-rf", str(config.home_dir)]]

    def test_raises_when_directory_survives(self, config, monkeypatch, capsys):
        config.home_dir.mkdir()
        monkeypatch.setattr("kusion_uninstall.remover._remove_path", lambda _path: None)

        with pytest.raises(DirectoryRemovalError) as excinfo:
            remove_installation_dir(config)
        assert excinfo.value.path == config.home_dir
        assert excinfo.value.exit_code == 1
        assert "Removing kusion installation dir failed." in capsys.readouterr().err
