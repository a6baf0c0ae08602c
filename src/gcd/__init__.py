"""gcd: jump to indexed git repositories by fuzzy name."""

__version__ = "0.1.0"
