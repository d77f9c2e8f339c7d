"""Filename pattern matching with sets, quoting, negation and dot-boundary closures."""

from .config import DOS, PRINTABLE_SUB, SUB, UNIX, MatcherConfig
from .patterns import Matcher, MatchResult, PatternSyntaxError, isvalid, match, matchn
from .validator import Defect
from .version import __version__

__all__ = [
    "DOS",
    "PRINTABLE_SUB",
    "SUB",
    "UNIX",
    "Defect",
    "MatchResult",
    "Matcher",
    "MatcherConfig",
    "PatternSyntaxError",
    "__version__",
    "isvalid",
    "match",
    "matchn",
]
