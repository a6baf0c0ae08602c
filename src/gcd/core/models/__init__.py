"""Domain models for gcd."""

from gcd.core.models.index import Index, IndexFile, IndexResult, Match

__all__ = [
    "Index",
    "IndexFile",
    "IndexResult",
    "Match",
]
