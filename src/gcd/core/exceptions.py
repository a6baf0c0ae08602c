"""Exceptions raised by gcd."""

from typing import Any


class GcdError(Exception):
    """Base exception for gcd."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigLoadError(GcdError):
    """The persisted index exists but cannot be read or parsed.

    Recovered inside the config store, which substitutes an empty index.
    """


class ConfigSaveError(GcdError):
    """The persisted index cannot be written."""


class InvalidScanRootError(GcdError):
    """The directory requested for indexing does not exist or cannot be resolved."""


class NoMatchFoundError(GcdError):
    """No indexed repository matches the query.

    An expected negative result, not a system failure.
    """


class UnsupportedShellError(GcdError):
    """Shell integration was requested for an unknown shell."""
