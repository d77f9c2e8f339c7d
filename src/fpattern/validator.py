from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import NOT, SET_CLOSE, SET_NOT, SET_OPEN, SET_THRU, MatcherConfig

logger = logging.getLogger(__name__)

NULL_PATTERN = "NULL_PATTERN"
UNTERMINATED_SET = "UNTERMINATED_SET"
MISSING_QUOTED_CHAR = "MISSING_QUOTED_CHAR"
MISSING_NEGATED_SUBPATTERN = "MISSING_NEGATED_SUBPATTERN"


@dataclass(frozen=True)
class Defect:
    code: str
    message: str
    position: int | None = None

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


def find_defect(pattern: str | None, config: MatcherConfig | None = None) -> Defect | None:
    """Scan *pattern* once, left to right, and return the first defect.

    Returns ``None`` for a well-formed pattern. The empty pattern is valid;
    the only filename it matches is the empty one.
    """
    config = config or MatcherConfig()
    if pattern is None:
        return Defect(NULL_PATTERN, "pattern is missing")

    quote = config.quote
    n = len(pattern)
    i = 0

    while i < n:
        ch = pattern[i]

        if ch == SET_OPEN:
            start = i
            i += 1
            if i < n and pattern[i] == SET_NOT:
                i += 1

            while i >= n or pattern[i] != SET_CLOSE:
                if i < n and pattern[i] == quote:
                    i += 1
                if i >= n:
                    return Defect(UNTERMINATED_SET, f"missing '{SET_CLOSE}'", start)
                i += 1

                if i < n and pattern[i] == SET_THRU:
                    i += 1
                    if i < n and pattern[i] == quote:
                        i += 1
                    if i >= n:
                        return Defect(UNTERMINATED_SET, f"missing '{SET_THRU}{SET_CLOSE}'", start)
                    i += 1

                if i >= n:
                    return Defect(UNTERMINATED_SET, f"missing '{SET_CLOSE}'", start)

        elif ch == quote:
            if i + 1 >= n:
                return Defect(MISSING_QUOTED_CHAR, "missing quoted char", i)
            i += 1

        elif ch == NOT:
            if i + 1 >= n:
                return Defect(MISSING_NEGATED_SUBPATTERN, "missing negated subpattern", i)
            # The first character of the negated subpattern is taken as is.
            i += 1

        i += 1

    return None


def isvalid(
    pattern: str | None,
    config: MatcherConfig | None = None,
    *,
    log: logging.Logger | None = None,
) -> bool:
    defect = find_defect(pattern, config)
    if defect is not None and config is not None and config.trace:
        (log or logger).debug("isvalid: pattern=%r: %s", pattern, defect)
    return defect is None
