"""Application settings using Pydantic Settings."""

import os
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "gcd"
CONFIG_FILENAME = "config.json"


def default_config_dir() -> Path:
    """Return the per-user configuration directory for the current platform."""
    if sys.platform == "win32":
        if appdata := os.environ.get("APPDATA"):
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    if xdg := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg)
    return Path.home() / ".config"


def default_config_path() -> Path:
    return default_config_dir() / APP_NAME / CONFIG_FILENAME


class Settings(BaseSettings):
    """Application settings loaded from GCD_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GCD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Index file location
    config_path: Path = Field(default_factory=default_config_path)

    # Logging
    log_level: str = "WARNING"

    # Scanning
    marker_dir: str = ".git"
    skip_dirs: list[str] = [".git", "node_modules", "target"]
    follow_symlinks: bool = True

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.config_path = self.config_path.expanduser()

    @property
    def index_path(self) -> Path:
        return self.config_path


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
