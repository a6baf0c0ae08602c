"""Shell integration: wrapper functions that cd into the resolved path.

The binary cannot change its parent shell's directory, so each supported
shell gets a small function named ``gcd`` that runs the binary, captures
stdout and changes directory on success. The function is appended once to
the shell's profile, guarded by ``MARKER``. Subcommands and options are
passed through to the binary unchanged; only lookups are collapsed into
one pattern.
"""

import subprocess
from pathlib import Path

import structlog
from pydantic import BaseModel

from gcd.core.exceptions import UnsupportedShellError

logger = structlog.get_logger(__name__)

MARKER = "### GCD Integration"

BASH_INTEGRATION = """
gcd() {
    if [ "$#" -eq 0 ]; then
        command gcd
        return
    fi
    case "$1" in
        index|install|-*)
            command gcd "$@"
            return
            ;;
    esac
    local output
    output=$(command gcd "$*")
    if [ $? -eq 0 ]; then
        cd "$output" || return 1
    else
        echo "$output"
        return 1
    fi
}
"""

ZSH_INTEGRATION = BASH_INTEGRATION

FISH_INTEGRATION = """
function gcd
    if test (count $argv) -eq 0
        command gcd
        return
    end
    switch $argv[1]
        case index install '-*'
            command gcd $argv
            return
    end
    set -l output (command gcd (string join ' ' -- $argv))
    if test $status -eq 0
        cd $output
    else
        echo $output
        return 1
    end
end
"""

POWERSHELL_INTEGRATION = """
function gcd {
    if ($args.Count -eq 0) {
        & gcd.exe
        return
    }
    $first = "$($args[0])"
    if ($first -in @('index', 'install') -or $first.StartsWith('-')) {
        & gcd.exe @args
        return
    }
    $output = & gcd.exe ($args -join ' ')
    if ($LASTEXITCODE -eq 0) {
        Set-Location $output
    } else {
        Write-Host $output
        return $LASTEXITCODE
    }
}
"""


SCRIPTS = {
    "bash": BASH_INTEGRATION,
    "zsh": ZSH_INTEGRATION,
    "fish": FISH_INTEGRATION,
    "ps": POWERSHELL_INTEGRATION,
}

SUPPORTED_SHELLS = tuple(SCRIPTS)


class InstallResult(BaseModel):
    """Outcome of a shell integration install."""

    shell: str
    profile_path: Path
    installed: bool


def powershell_profile_path(home: Path) -> Path:
    """Ask PowerShell for $PROFILE, falling back to the Windows default."""
    for executable in ("powershell", "pwsh"):
        try:
            result = subprocess.run(
                [executable, "-NoProfile", "-Command", "echo $PROFILE"],
                capture_output=True,
                text=True,
                check=True,
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            continue
        profile = result.stdout.strip()
        if profile:
            return Path(profile)

    logger.debug("PowerShell profile not reported, using default location")
    return home / "Documents" / "WindowsPowerShell" / "Microsoft.PowerShell_profile.ps1"


def profile_path(shell: str, home: Path | None = None) -> Path:
    """Return the profile file the integration for ``shell`` is written to."""
    home = home or Path.home()
    if shell == "bash":
        return home / ".bashrc"
    if shell == "zsh":
        return home / ".zshrc"
    if shell == "fish":
        return home / ".config" / "fish" / "config.fish"
    if shell == "ps":
        return powershell_profile_path(home)
    raise UnsupportedShellError(
        f"Unsupported shell: {shell}",
        details={"shell": shell, "supported": ", ".join(SUPPORTED_SHELLS)},
    )


def install_shell_integration(shell: str, home: Path | None = None) -> InstallResult:
    """Append the gcd wrapper to the profile of ``shell``.

    Does nothing if the profile already contains the integration marker.
    """
    path = profile_path(shell, home)
    script = SCRIPTS[shell]

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        content = ""

    if MARKER in content:
        logger.info("Shell integration already present", shell=shell, path=str(path))
        return InstallResult(shell=shell, profile_path=path, installed=False)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(f"\n{MARKER}\n{script}")

    logger.info("Shell integration installed", shell=shell, path=str(path))
    return InstallResult(shell=shell, profile_path=path, installed=True)
