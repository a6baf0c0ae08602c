"""Utility functions for gcd."""

from gcd.utils.fuzzy import FuzzyMatcher

__all__ = ["FuzzyMatcher"]
