from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import MatcherConfig
from .matcher import submatch
from .validator import NULL_PATTERN, Defect, find_defect, isvalid as _isvalid

MATCH = "match"
NO_MATCH = "no-match"
MISSING_ARGUMENT = "missing-argument"
INVALID_PATTERN = "invalid-pattern"


class PatternSyntaxError(ValueError):
    def __init__(self, pattern: str | None, defect: Defect):
        super().__init__(f"invalid pattern {pattern!r}: {defect}")
        self.pattern = pattern
        self.defect = defect


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    reason: str
    defect: Defect | None = None

    def __bool__(self) -> bool:
        return self.matched


class Matcher:
    """Filename pattern matcher bound to one configuration.

    Patterns are interpreted on every call; nothing is compiled or cached
    between calls, so a single instance can be shared freely between threads.
    """

    def __init__(self, config: MatcherConfig | None = None, *, logger: logging.Logger | None = None):
        self.config = config or MatcherConfig()
        self.logger = logger or logging.getLogger(__name__)

    def __repr__(self) -> str:
        return f"Matcher({self.config!r})"

    def isvalid(self, pattern: str | None) -> bool:
        return _isvalid(pattern, self.config, log=self.logger)

    def require_valid(self, pattern: str | None) -> str:
        if pattern is None:
            raise PatternSyntaxError(pattern, Defect(NULL_PATTERN, "pattern is missing"))
        defect = find_defect(pattern, self.config)
        if defect is not None:
            raise PatternSyntaxError(pattern, defect)
        return pattern

    def match(self, pattern: str | None, filename: str | None) -> bool:
        """Match *filename* against *pattern*, validating the pattern first.

        Returns False for a missing argument, a malformed pattern, or a
        filename the pattern does not match. An empty filename is matched
        only by the empty pattern.
        """
        if pattern is None or filename is None:
            return False
        if not self.isvalid(pattern):
            return False
        return self._match(pattern, filename)

    def matchn(self, pattern: str | None, filename: str | None) -> bool:
        """Like :meth:`match` but trusts that *pattern* was validated.

        Malformed patterns are not detected up front; they simply fail to
        match.
        """
        if pattern is None or filename is None:
            return False
        return self._match(pattern, filename)

    def explain(self, pattern: str | None, filename: str | None) -> MatchResult:
        if pattern is None or filename is None:
            return MatchResult(matched=False, reason=MISSING_ARGUMENT)
        defect = find_defect(pattern, self.config)
        if defect is not None:
            return MatchResult(matched=False, reason=INVALID_PATTERN, defect=defect)
        if self._match(pattern, filename):
            return MatchResult(matched=True, reason=MATCH)
        return MatchResult(matched=False, reason=NO_MATCH)

    def _match(self, pattern: str, filename: str) -> bool:
        if not filename:
            return not pattern
        return submatch(pattern, filename, self.config, log=self.logger)


_default = Matcher()


def isvalid(pattern: str | None) -> bool:
    return _default.isvalid(pattern)


def match(pattern: str | None, filename: str | None) -> bool:
    return _default.match(pattern, filename)


def matchn(pattern: str | None, filename: str | None) -> bool:
    return _default.matchn(pattern, filename)
