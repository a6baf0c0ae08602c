"""Indexing service."""

from collections.abc import Iterable
from pathlib import Path

import structlog

from gcd.core.exceptions import InvalidScanRootError
from gcd.core.models.index import Index, IndexResult
from gcd.git.scanner import RepoScanner
from gcd.repositories.config_store import ConfigStore

logger = structlog.get_logger(__name__)


def _is_encodable(path: Path) -> bool:
    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def build_index(existing: Index, discovered: Iterable[Path]) -> Index:
    """Merge discovered repository roots into an index.

    Each root is keyed by its final path component. Later roots overwrite
    earlier ones with the same name, and entries that were not rediscovered
    are kept. Roots whose path is not valid UTF-8 cannot be stored and are
    skipped. ``existing`` is not modified.
    """
    merged = dict(existing)
    for path in discovered:
        if not _is_encodable(path):
            logger.warning("Skipping repository with undecodable path", path=repr(str(path)))
            continue
        name = path.name
        previous = merged.get(name)
        if previous is not None and previous != path:
            logger.debug("Replacing indexed repository", name=name, old=str(previous), new=str(path))
        merged[name] = path
    return merged


class IndexingService:
    """Scans a directory tree and records the repositories it contains."""

    def __init__(self, store: ConfigStore, scanner: RepoScanner) -> None:
        self._store = store
        self._scanner = scanner

    @staticmethod
    def resolve_scan_root(scan_root: Path | str) -> Path:
        """Canonicalise the scan root, failing before any scanning is done."""
        try:
            root = Path(scan_root).expanduser().resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise InvalidScanRootError(
                f"Path does not exist: {scan_root}",
                details={"path": str(scan_root), "error": str(e)},
            ) from e
        if not root.is_dir():
            raise InvalidScanRootError(
                f"Path is not a directory: {root}",
                details={"path": str(root)},
            )
        return root

    def index(self, scan_root: Path | str) -> IndexResult:
        """Index all repositories under ``scan_root`` and save the index.

        The index is saved once, after the scan; an interrupted run leaves
        the previous file untouched.
        """
        root = self.resolve_scan_root(scan_root)
        existing = self._store.load()
        discovered = self._scanner.scan(root)
        index = build_index(existing, discovered)
        self._store.save(index)

        logger.info("Indexing complete", root=str(root), found=len(discovered), total=len(index))
        return IndexResult(scan_root=root, count=len(discovered), total=len(index))
