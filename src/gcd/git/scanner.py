"""Git repository scanner."""

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_MARKER_DIR = ".git"
DEFAULT_SKIP_DIRS = frozenset({".git", "node_modules", "target"})


class RepoScanner:
    """Walks a directory tree looking for repository roots.

    A directory is a repository root when it has an immediate child
    directory named after the marker (``.git``). Directories in the skip
    list are never descended into, at any depth. Descent continues below a
    root, so repositories nested inside other repositories are found too.
    """

    def __init__(
        self,
        marker_dir: str = DEFAULT_MARKER_DIR,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
        follow_symlinks: bool = True,
    ) -> None:
        self._marker_dir = marker_dir
        self._skip_dirs = frozenset(skip_dirs)
        self._follow_symlinks = follow_symlinks

    @property
    def skip_dirs(self) -> frozenset[str]:
        return self._skip_dirs

    def is_repo_root(self, path: Path) -> bool:
        """Check if the path contains the repository marker directory."""
        return (path / self._marker_dir).is_dir()

    def iter_repos(self, root: Path) -> Iterator[Path]:
        """Yield repository roots under ``root`` (inclusive), lazily.

        Siblings are visited in sorted order so an unchanged tree always
        yields the same sequence.
        """
        visited: set[str] = set()

        for dirpath, dirnames, _ in os.walk(
            root,
            topdown=True,
            onerror=self._on_error,
            followlinks=self._follow_symlinks,
        ):
            real = os.path.realpath(dirpath)
            if real in visited:
                # Symlink loop or alias of an already scanned directory
                dirnames[:] = []
                continue
            visited.add(real)

            if self._marker_dir in dirnames:
                logger.debug("Repository found", path=real)
                yield Path(real)

            dirnames[:] = sorted(d for d in dirnames if d not in self._skip_dirs)

    def scan(self, root: Path) -> list[Path]:
        """Return all repository roots under ``root``."""
        repos = list(self.iter_repos(root))
        logger.info("Scan complete", root=str(root), repos=len(repos))
        return repos

    @staticmethod
    def _on_error(error: OSError) -> None:
        logger.debug("Skipping unreadable directory", path=error.filename, error=str(error))
