"""Retrieval service: resolve a query to an indexed repository."""

from pathlib import Path

import structlog

from gcd.core.exceptions import NoMatchFoundError
from gcd.core.models.index import Index, Match
from gcd.repositories.config_store import ConfigStore
from gcd.utils.fuzzy import FuzzyMatcher

logger = structlog.get_logger(__name__)


def rank(index: Index, query: str, matcher: FuzzyMatcher | None = None) -> list[Match]:
    """Score every entry against ``query``.

    Entries without a positive score are dropped. The result is ordered by
    descending score, then by name, so ties always resolve the same way.
    """
    matcher = matcher or FuzzyMatcher()
    matches = []
    for name, path in index.items():
        score = matcher.score(name, query)
        if score is not None and score > 0:
            matches.append(Match(name=name, path=path, score=score))
    matches.sort(key=lambda m: (-m.score, m.name))
    return matches


def best_match(index: Index, query: str, matcher: FuzzyMatcher | None = None) -> Match | None:
    matches = rank(index, query, matcher)
    return matches[0] if matches else None


def resolve(index: Index, query: str, matcher: FuzzyMatcher | None = None) -> Path | None:
    """Return the path of the best matching entry, or None."""
    match = best_match(index, query, matcher)
    return match.path if match else None


class RetrievalService:
    """Loads the persisted index and resolves queries against it."""

    def __init__(self, store: ConfigStore, matcher: FuzzyMatcher | None = None) -> None:
        self._store = store
        self._matcher = matcher or FuzzyMatcher()

    def list_repositories(self) -> Index:
        """Return the index sorted by name."""
        index = self._store.load()
        return dict(sorted(index.items()))

    def resolve(self, query: str) -> Match:
        """Resolve ``query`` to the best matching repository."""
        index = self._store.load()
        match = best_match(index, query, self._matcher)
        if match is None:
            raise NoMatchFoundError(
                "No matching repository found",
                details={"query": query, "indexed": len(index)},
            )
        logger.debug("Query resolved", query=query, name=match.name, score=match.score)
        return match
