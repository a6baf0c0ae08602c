"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from gcd.config.logging import configure_logging
from gcd.config.settings import get_settings
from gcd.repositories.config_store import ConfigStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the index file at a temporary location and route logs to stderr."""
    config_path = tmp_path / "config" / "gcd" / "config.json"
    monkeypatch.setenv("GCD_CONFIG_PATH", str(config_path))
    configure_logging(log_level="DEBUG")
    get_settings.cache_clear()
    yield config_path
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def config_path(isolated_settings: Path) -> Path:
    return isolated_settings


@pytest.fixture
def store(config_path: Path) -> ConfigStore:
    return ConfigStore(config_path)


@pytest.fixture
def make_repo() -> Callable[[Path], Path]:
    """Create a directory that looks like a git repository root."""

    def _make_repo(path: Path) -> Path:
        (path / ".git").mkdir(parents=True)
        return path

    return _make_repo


@pytest.fixture
def workspace(tmp_path: Path, make_repo) -> Path:
    """A directory tree with a few repositories and some noise.

    workspace/
        frontend/.git
        fe-utils/.git
        tools/backend/.git
        tools/backend/vendor/lib/.git     (nested repository)
        frontend/node_modules/dep/.git   (pruned)
        rust-app/.git
        rust-app/target/debug/build/.git (pruned)
        notes/                           (not a repository)
    """
    root = tmp_path / "workspace"
    make_repo(root / "frontend")
    make_repo(root / "fe-utils")
    make_repo(root / "tools" / "backend")
    make_repo(root / "tools" / "backend" / "vendor" / "lib")
    make_repo(root / "frontend" / "node_modules" / "dep")
    make_repo(root / "rust-app")
    make_repo(root / "rust-app" / "target" / "debug" / "build")
    (root / "notes").mkdir()
    return root
