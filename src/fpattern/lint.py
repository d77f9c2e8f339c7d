from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .config import NOT, SET_CLOSE, SET_NOT, SET_OPEN, SET_THRU, MatcherConfig
from .matcher import ascii_fold
from .patterns import Matcher
from .validator import (
    MISSING_NEGATED_SUBPATTERN,
    MISSING_QUOTED_CHAR,
    NULL_PATTERN,
    UNTERMINATED_SET,
    find_defect,
)

EMPTY_SET = "EMPTY_SET"
EMPTY_RANGE = "EMPTY_RANGE"

_HINTS = {
    NULL_PATTERN: "Pass a string; use \"\" to match only the empty filename.",
    UNTERMINATED_SET: "Close the set with ']' or quote the '[' to match it literally.",
    MISSING_QUOTED_CHAR: "Follow the quote with the character to match, or quote the quote itself.",
    MISSING_NEGATED_SUBPATTERN: "Put a subpattern after '!' or quote the '!' to match it literally.",
}


@dataclass(frozen=True)
class Issue:
    severity: str  # "ERROR" | "WARN"
    code: str
    message: str
    pattern: str | None = None
    position: int | None = None
    hint: str | None = None


@dataclass(frozen=True)
class LintResult:
    issues: list[Issue]

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "ERROR" for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == "WARN" for i in self.issues)


def _set_warnings(pattern: str, config: MatcherConfig, *, strict: bool) -> list[Issue]:
    # Only called for well-formed patterns, so every set is closed.
    issues: list[Issue] = []
    severity = "ERROR" if strict else "WARN"
    fold = (lambda ch: ch) if config.case_sensitive else ascii_fold
    quote = config.quote
    n = len(pattern)
    i = 0

    while i < n:
        ch = pattern[i]
        if ch == quote or ch == NOT:
            i += 2
            continue
        if ch != SET_OPEN:
            i += 1
            continue

        start = i
        i += 1
        negated = i < n and pattern[i] == SET_NOT
        if negated:
            i += 1
        members = 0
        while pattern[i] != SET_CLOSE:
            if pattern[i] == quote:
                i += 1
            lo = hi = pattern[i]
            i += 1
            if pattern[i] == SET_THRU:
                i += 1
                if pattern[i] == quote:
                    i += 1
                hi = pattern[i]
                i += 1
            members += 1
            if fold(lo) > fold(hi):
                issues.append(
                    Issue(
                        severity=severity,
                        code=EMPTY_RANGE,
                        message=f"Range '{lo}{SET_THRU}{hi}' is empty and matches no character.",
                        pattern=pattern,
                        position=start,
                        hint=f"Swap the endpoints, or quote '{SET_THRU}' to list it as a member.",
                    )
                )

        if members == 0 and not negated:
            issues.append(
                Issue(
                    severity=severity,
                    code=EMPTY_SET,
                    message="Empty set '[]' matches no character, so the pattern never matches.",
                    pattern=pattern,
                    position=start,
                    hint=f"Quote the bracket ({quote}[) to match it literally.",
                )
            )
        i += 1

    return issues


def lint_pattern(pattern: str | None, matcher: Matcher | None = None, *, strict: bool = False) -> LintResult:
    """Lint a single pattern.

    Malformed patterns produce one ERROR (the validator stops at the first
    defect). Well-formed patterns are checked for sets and ranges that can
    never match; those are warnings unless *strict* is set.
    """
    matcher = matcher or Matcher()
    defect = find_defect(pattern, matcher.config)
    if defect is None:
        # find_defect reports a missing pattern, so here it is a str.
        return LintResult(issues=_set_warnings(pattern or "", matcher.config, strict=strict))
    return LintResult(
        issues=[
            Issue(
                severity="ERROR",
                code=defect.code,
                message=defect.message,
                pattern=pattern,
                position=defect.position,
                hint=_HINTS.get(defect.code),
            )
        ]
    )


def lint_patterns(patterns: Iterable[str | None], matcher: Matcher | None = None, *, strict: bool = False) -> LintResult:
    matcher = matcher or Matcher()
    issues: list[Issue] = []
    for p in patterns:
        issues.extend(lint_pattern(p, matcher, strict=strict).issues)
    return LintResult(issues=issues)
