"""JSON file store for the repository index."""

import os
import tempfile
from pathlib import Path

import structlog
from pydantic import ValidationError

from gcd.core.exceptions import ConfigLoadError, ConfigSaveError
from gcd.core.models.index import Index, IndexFile

logger = structlog.get_logger(__name__)


class ConfigStore:
    """Loads and saves the name -> path index as a single JSON document.

    The whole file is read on ``load`` and replaced on ``save``; there is no
    locking, so two concurrent saves resolve as last writer wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Index:
        """Load the index.

        A missing file is an empty index. A file that cannot be read or
        parsed is also treated as empty, with a warning on stderr.
        """
        if not self._path.exists():
            logger.debug("Index file not found, starting empty", path=str(self._path))
            return {}

        try:
            return self._read()
        except ConfigLoadError as e:
            logger.warning(
                "Ignoring unreadable index file",
                path=str(self._path),
                error=e.details.get("error"),
            )
            return {}

    def _read(self) -> Index:
        try:
            contents = self._path.read_text(encoding="utf-8")
            index_file = IndexFile.model_validate_json(contents)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise ConfigLoadError(
                f"Failed to load index file: {self._path}",
                details={"path": str(self._path), "error": str(e)},
            ) from e
        return dict(index_file.repos)

    def save(self, index: Index) -> None:
        """Write the full index, replacing the previous file atomically."""
        try:
            contents = IndexFile(repos=index).model_dump_json(indent=2)
        except ValueError as e:
            raise ConfigSaveError(
                f"Failed to serialize index file: {self._path}",
                details={"path": str(self._path), "error": str(e)},
            ) from e

        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(contents)
                f.write("\n")
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as e:
            raise ConfigSaveError(
                f"Failed to save index file: {self._path}",
                details={"path": str(self._path), "error": str(e)},
            ) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

        logger.info("Index saved", path=str(self._path), repos=len(index))
