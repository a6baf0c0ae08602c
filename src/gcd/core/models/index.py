"""Index models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Repository leaf name -> absolute repository root
Index = dict[str, Path]


class IndexFile(BaseModel):
    """On-disk shape of the persisted index.

    Unknown fields are ignored so older binaries can read newer files.
    """

    model_config = ConfigDict(extra="ignore")

    repos: dict[str, Path] = Field(default_factory=dict)


class IndexResult(BaseModel):
    """Outcome of an index run."""

    scan_root: Path
    count: int = Field(ge=0, description="Repositories found by this scan")
    total: int = Field(ge=0, description="Entries in the index after the merge")


class Match(BaseModel):
    """An indexed repository scored against a query."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    score: int
