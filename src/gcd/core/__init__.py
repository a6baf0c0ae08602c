"""Core domain models and exceptions for gcd."""

from gcd.core.exceptions import (
    ConfigLoadError,
    ConfigSaveError,
    GcdError,
    InvalidScanRootError,
    NoMatchFoundError,
    UnsupportedShellError,
)
from gcd.core.models import Index, IndexFile, IndexResult, Match

__all__ = [
    # Models
    "Index",
    "IndexFile",
    "IndexResult",
    "Match",
    # Exceptions
    "GcdError",
    "ConfigLoadError",
    "ConfigSaveError",
    "InvalidScanRootError",
    "NoMatchFoundError",
    "UnsupportedShellError",
]
