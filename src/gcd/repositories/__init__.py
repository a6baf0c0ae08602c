"""Persistence for gcd."""

from gcd.repositories.config_store import ConfigStore

__all__ = ["ConfigStore"]
