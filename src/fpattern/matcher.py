"""Backtracking matcher for filename patterns.

The search walks the pattern and the filename in lock-step. Closures fork the
search: every closure records a choice point holding the candidate run
lengths, tried longest first. A failed branch resumes at the most recent choice
point with one character less. Negation opens a nested frame whose verdict is
inverted when it finishes. Both stacks are explicit lists, so the depth of a
pattern is not limited by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Union

from .config import ANY, CLOSURE, NOT, SET_CLOSE, SET_NOT, SET_OPEN, SET_THRU, MatcherConfig

logger = logging.getLogger(__name__)


class _Fork(NamedTuple):
    pi: int
    lo: int
    hi: int


class _Negate(NamedTuple):
    pi: int
    fi: int


_Step = Union[bool, _Fork, _Negate]


@dataclass
class _Choice:
    pi: int
    lo: int
    current: int


@dataclass
class _Frame:
    root: tuple[int, int]
    state: tuple[int, int]
    choices: list[_Choice] = field(default_factory=list)


def ascii_fold(ch: str) -> str:
    # ASCII only; full Unicode case folding is out of scope.
    if "A" <= ch <= "Z":
        return chr(ord(ch) + 32)
    return ch


class _Search:
    def __init__(self, pattern: str, filename: str, config: MatcherConfig, log: logging.Logger):
        self.pattern = pattern
        self.filename = filename
        self.config = config
        self.log = log
        self.trace = config.trace
        self.failed: set[tuple[int, int]] | None = set() if config.memoize else None
        self.fold = (lambda ch: ch) if config.case_sensitive else ascii_fold
        self.stops = {
            CLOSURE: config.closure_stops(CLOSURE),
            config.sub_closure: config.closure_stops(config.sub_closure),
        }

    def run(self, pi: int = 0, fi: int = 0) -> bool:
        frames = [_Frame(root=(pi, fi), state=(pi, fi))]
        verdict: bool | None = None

        while True:
            frame = frames[-1]
            if verdict is None:
                step = self._advance(frame)
                if isinstance(step, _Frame):
                    frames.append(step)
                    continue
                ok = step
            else:
                # Resuming after a negated subpattern.
                ok = not verdict
                verdict = None

            if not ok and self._backtrack(frame):
                continue

            frames.pop()
            if not frames:
                return ok
            verdict = ok

    def _advance(self, frame: _Frame) -> bool | _Frame:
        pi, fi = frame.state
        while True:
            if self.failed is not None and (pi, fi) in self.failed:
                return False
            if self.trace:
                self.log.debug("branch pattern=%d filename=%d", pi, fi)

            step = self._walk(pi, fi)
            if isinstance(step, _Fork):
                frame.choices.append(_Choice(pi=step.pi, lo=step.lo, current=step.hi))
                pi, fi = step.pi, step.hi
                frame.state = (pi, fi)
                continue
            if isinstance(step, _Negate):
                return _Frame(root=(step.pi, step.fi), state=(step.pi, step.fi))
            return step

    def _backtrack(self, frame: _Frame) -> bool:
        while frame.choices:
            choice = frame.choices[-1]
            if self.failed is not None:
                self.failed.add((choice.pi, choice.current))
            choice.current -= 1
            if choice.current >= choice.lo:
                frame.state = (choice.pi, choice.current)
                return True
            frame.choices.pop()
        if self.failed is not None:
            self.failed.add(frame.root)
        return False

    def _walk(self, pi: int, fi: int) -> _Step:
        """Consume tokens until the branch ends, forks or negates."""
        pattern, filename, config = self.pattern, self.filename, self.config
        plen, flen = len(pattern), len(filename)
        fold = self.fold

        while pi < plen:
            pch = pattern[pi]
            pi += 1
            fch = filename[fi] if fi < flen else None

            if pch == ANY:
                if fch is None or config.is_separator(fch):
                    return False
                fi += 1

            elif pch == CLOSURE or pch == config.sub_closure:
                stops = self.stops[pch]
                end = fi
                while end < flen and filename[end] not in stops:
                    end += 1
                return _Fork(pi=pi, lo=fi, hi=end)

            elif pch == config.quote:
                if pi >= plen or fch is None or fold(fch) != fold(pattern[pi]):
                    return False
                fi += 1
                pi += 1

            elif pch == SET_OPEN:
                pi = self._match_set(pi, fch)
                if pi < 0:
                    return False
                fi += 1

            elif pch == NOT:
                if pi >= plen:
                    return False
                return _Negate(pi=pi, fi=fi)

            elif config.is_separator(pch):
                if fch is None or not config.is_separator(fch):
                    return False
                fi += 1

            else:
                if fch is None or fold(fch) != fold(pch):
                    return False
                fi += 1

        return fi >= flen

    def _match_set(self, pi: int, fch: str | None) -> int:
        """Match *fch* against the set starting after '['.

        Returns the pattern index past ']' or -1 on failure, including a set
        left open at the end of the pattern.
        """
        pattern, quote = self.pattern, self.config.quote
        plen = len(pattern)
        fold = self.fold

        if fch is None:
            return -1

        yes = True
        if pi < plen and pattern[pi] == SET_NOT:
            pi += 1
            yes = False

        c = fold(fch)
        matched = not yes
        while pi < plen and pattern[pi] != SET_CLOSE:
            if pattern[pi] == quote:
                pi += 1
            if pi >= plen:
                break
            lo = pattern[pi]
            pi += 1
            hi = lo

            if pi < plen and pattern[pi] == SET_THRU:
                pi += 1
                if pi < plen and pattern[pi] == quote:
                    pi += 1
                if pi >= plen:
                    break
                hi = pattern[pi]
                pi += 1

            if pi >= plen:
                break

            if fold(lo) <= c <= fold(hi):
                matched = yes

        if self.trace:
            self.log.debug("set: char=%r match=%s", fch, matched)
        if not matched or pi >= plen:
            return -1
        return pi + 1


def submatch(
    pattern: str,
    filename: str,
    config: MatcherConfig | None = None,
    *,
    log: logging.Logger | None = None,
) -> bool:
    """Match *pattern* against *filename* without validating the pattern.

    Malformed patterns (an open set, a dangling quote or negation) never match.
    """
    config = config or MatcherConfig()
    log = log or logger
    if config.trace:
        log.debug("submatch: pattern=%r filename=%r", pattern, filename)
    result = _Search(pattern, filename, config, log).run()
    if config.trace:
        log.debug("submatch: return %s", result)
    return result
