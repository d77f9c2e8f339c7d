from __future__ import annotations


class FPatternError(Exception):
    """Base exception for fpattern."""


class ConfigError(FPatternError):
    """Matcher configuration is missing or invalid."""


class UsageError(FPatternError):
    """Invalid CLI usage (user error)."""
