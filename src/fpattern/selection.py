from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .patterns import Matcher


@dataclass(frozen=True)
class FilterReport:
    pattern: str
    matched: list[str] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)

    def total(self) -> int:
        return len(self.matched) + len(self.unmatched)


def filter_names(
    pattern: str,
    names: Iterable[str],
    matcher: Matcher | None = None,
    *,
    validate: bool = True,
) -> FilterReport:
    """Split *names* into those *pattern* matches and those it does not.

    The pattern is validated once (raising PatternSyntaxError) and every name
    then goes through the fast path. Input order is kept.
    """
    matcher = matcher or Matcher()
    if validate:
        matcher.require_valid(pattern)

    matched: list[str] = []
    unmatched: list[str] = []
    for name in names:
        if matcher.matchn(pattern, name):
            matched.append(name)
        else:
            unmatched.append(name)

    return FilterReport(pattern=pattern, matched=matched, unmatched=unmatched)
