"""Repository discovery for gcd."""

from gcd.git.scanner import RepoScanner

__all__ = ["RepoScanner"]
