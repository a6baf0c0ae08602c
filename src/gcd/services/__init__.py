"""Services for gcd."""

from gcd.services.indexing import IndexingService, build_index
from gcd.services.retrieval import RetrievalService, rank, resolve

__all__ = [
    "IndexingService",
    "RetrievalService",
    "build_index",
    "rank",
    "resolve",
]
