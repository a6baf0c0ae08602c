"""Tests for shell integration."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from gcd.core.exceptions import UnsupportedShellError
from gcd.shell import integration
from gcd.shell.integration import (
    BASH_INTEGRATION,
    FISH_INTEGRATION,
    MARKER,
    POWERSHELL_INTEGRATION,
    install_shell_integration,
    profile_path,
)


@pytest.mark.unit
class TestProfilePath:
    """Tests for profile_path."""

    def test_bash(self, tmp_path: Path) -> None:
        assert profile_path("bash", tmp_path) == tmp_path / ".bashrc"

    def test_zsh(self, tmp_path: Path) -> None:
        assert profile_path("zsh", tmp_path) == tmp_path / ".zshrc"

    def test_fish(self, tmp_path: Path) -> None:
        assert profile_path("fish", tmp_path) == tmp_path / ".config" / "fish" / "config.fish"

    def test_powershell_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def _missing(*args, **kwargs):
            raise FileNotFoundError("powershell")

        monkeypatch.setattr(integration.subprocess, "run", _missing)
        expected = tmp_path / "Documents" / "WindowsPowerShell" / "Microsoft.PowerShell_profile.ps1"
        assert profile_path("ps", tmp_path) == expected

    def test_unsupported(self, tmp_path: Path) -> None:
        with pytest.raises(UnsupportedShellError) as exc_info:
            profile_path("tcsh", tmp_path)
        assert exc_info.value.details["shell"] == "tcsh"


@pytest.mark.unit
class TestInstallShellIntegration:
    """Tests for install_shell_integration."""

    def test_install_bash(self, tmp_path: Path) -> None:
        (tmp_path / ".bashrc").write_text("export EDITOR=vim\n")
        result = install_shell_integration("bash", tmp_path)

        assert result.installed is True
        content = (tmp_path / ".bashrc").read_text()
        assert content.startswith("export EDITOR=vim\n")
        assert MARKER in content
        assert BASH_INTEGRATION in content

    def test_install_is_idempotent(self, tmp_path: Path) -> None:
        install_shell_integration("zsh", tmp_path)
        result = install_shell_integration("zsh", tmp_path)

        assert result.installed is False
        assert (tmp_path / ".zshrc").read_text().count(MARKER) == 1

    def test_install_fish_creates_directories(self, tmp_path: Path) -> None:
        result = install_shell_integration("fish", tmp_path)
        assert result.profile_path.exists()
        assert FISH_INTEGRATION in result.profile_path.read_text()

    def test_lookup_wrappers_collapse_arguments(self) -> None:
        assert 'command gcd "$*"' in BASH_INTEGRATION
        assert "string join" in FISH_INTEGRATION
        assert "($args -join ' ')" in POWERSHELL_INTEGRATION

    def test_subcommands_passed_through(self) -> None:
        assert 'command gcd "$@"' in BASH_INTEGRATION
        assert "command gcd $argv" in FISH_INTEGRATION
        assert "& gcd.exe @args" in POWERSHELL_INTEGRATION


FAKE_GCD = """#!/bin/sh
printf '%s|%s\\n' "$#" "$*" >> "$GCD_CALLS"
case "$1" in
    index|install) echo "subcommand output"; exit 0 ;;
    zzz) echo "No matching repository found" >&2; exit 1 ;;
esac
echo "$GCD_TARGET"
"""


@pytest.mark.unit
@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")
class TestBashWrapper:
    """Runs the installed bash function against a stand-in gcd executable."""

    @pytest.fixture
    def shell_env(self, tmp_path: Path) -> dict[str, str]:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        fake = bin_dir / "gcd"
        fake.write_text(FAKE_GCD)
        fake.chmod(0o755)

        home = tmp_path / "home"
        home.mkdir()
        install_shell_integration("bash", home)

        start = tmp_path / "start"
        start.mkdir()
        target = tmp_path / "target repo"
        target.mkdir()

        env = dict(os.environ)
        env.pop("BASH_ENV", None)
        env.pop("CDPATH", None)
        env.update(
            PATH=f"{bin_dir}{os.pathsep}{env.get('PATH', '')}",
            PROFILE=str(home / ".bashrc"),
            START=str(start.resolve()),
            GCD_CALLS=str(tmp_path / "calls.log"),
            GCD_TARGET=str(target.resolve()),
        )
        return env

    def _run(self, env: dict[str, str], commands: str) -> subprocess.CompletedProcess:
        script = f'source "$PROFILE"\ncd "$START"\n{commands}\n'
        return subprocess.run(
            ["bash", "--norc", "--noprofile", "-c", script],
            env=env,
            capture_output=True,
            text=True,
            check=True,
        )

    def test_index_arguments_kept_separate(self, shell_env: dict[str, str]) -> None:
        result = self._run(shell_env, 'gcd index "/code dir"\npwd')

        assert result.stdout.splitlines() == ["subcommand output", shell_env["START"]]
        calls = Path(shell_env["GCD_CALLS"]).read_text().splitlines()
        assert calls == ["2|index /code dir"]

    def test_lookup_joins_words_and_changes_directory(self, shell_env: dict[str, str]) -> None:
        result = self._run(shell_env, "gcd my repo\npwd")

        assert result.stdout.splitlines() == [shell_env["GCD_TARGET"]]
        calls = Path(shell_env["GCD_CALLS"]).read_text().splitlines()
        assert calls == ["1|my repo"]

    def test_no_match_stays_put(self, shell_env: dict[str, str]) -> None:
        result = self._run(shell_env, 'gcd zzz\necho "status=$?"\npwd')

        lines = result.stdout.splitlines()
        assert "status=1" in lines
        assert lines[-1] == shell_env["START"]
        assert "No matching repository found" in result.stderr
