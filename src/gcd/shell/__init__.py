"""Shell integration for gcd."""

from gcd.shell.integration import SUPPORTED_SHELLS, install_shell_integration

__all__ = ["SUPPORTED_SHELLS", "install_shell_integration"]
