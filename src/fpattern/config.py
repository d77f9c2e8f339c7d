from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

# Pattern characters with a fixed meaning.
ANY = "?"
CLOSURE = "*"
SET_OPEN = "["
SET_CLOSE = "]"
SET_NOT = "!"
SET_THRU = "-"
NOT = "!"
DOT = "."

# Dot-boundary closure marker: control-Z in production, '~' when a printable
# alias is wanted (tests, command lines).
SUB = "\x1a"
PRINTABLE_SUB = "~"

_RESERVED = frozenset((ANY, CLOSURE, SET_OPEN, SET_CLOSE, SET_THRU, NOT, DOT))


@dataclass(frozen=True)
class MatcherConfig:
    delimiters: bool = False
    separators: str = "/"
    quote: str = "\\"
    sub_closure: str = SUB
    case_sensitive: bool = False
    trace: bool = False
    memoize: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.separators, str) or not 1 <= len(self.separators) <= 2:
            raise ConfigError(f"separators must be one or two characters, got {self.separators!r}")
        for name in ("quote", "sub_closure"):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise ConfigError(f"{name} must be a single character, got {value!r}")
            if value in _RESERVED:
                raise ConfigError(f"{name} {value!r} collides with a pattern operator")
        if self.quote == self.sub_closure:
            raise ConfigError(f"quote and sub_closure are both {self.quote!r}")
        if self.delimiters:
            for sep in self.separators:
                if sep in _RESERVED:
                    raise ConfigError(f"separator {sep!r} collides with a pattern operator")
            if self.quote in self.separators:
                raise ConfigError(f"quote {self.quote!r} is also a path separator")
            if self.sub_closure in self.separators:
                raise ConfigError(f"sub_closure {self.sub_closure!r} is also a path separator")

    def with_options(self, **changes: Any) -> "MatcherConfig":
        return dataclasses.replace(self, **changes)

    def is_separator(self, ch: str) -> bool:
        return self.delimiters and ch in self.separators

    def closure_stops(self, token: str) -> frozenset[str]:
        """Characters a closure token refuses to consume."""
        stops = set(self.separators) if self.delimiters else set()
        if token == self.sub_closure:
            stops.add(DOT)
        return frozenset(stops)


UNIX = MatcherConfig(separators="/", quote="\\")
DOS = MatcherConfig(separators="/\\", quote="`")

PRESETS: dict[str, MatcherConfig] = {"unix": UNIX, "dos": DOS}

_FIELD_TYPES: dict[str, type] = {
    "delimiters": bool,
    "separators": str,
    "quote": str,
    "sub_closure": str,
    "case_sensitive": bool,
    "trace": bool,
    "memoize": bool,
}


def preset(name: str) -> MatcherConfig:
    try:
        return PRESETS[name.lower()]
    except KeyError:
        raise ConfigError(f"unknown preset {name!r} (expected one of: {', '.join(sorted(PRESETS))})") from None


def parse_config_obj(data: Any, *, source: str) -> MatcherConfig:
    if data is None:
        return MatcherConfig()

    if not isinstance(data, Mapping):
        raise ConfigError(f"{source}: expected a mapping")

    # Accept either:
    # - {fpattern: {quote: "`", ...}}
    # - {quote: "`", ...}
    if "fpattern" in data and isinstance(data.get("fpattern"), Mapping):
        data = data["fpattern"]

    base = MatcherConfig()
    raw_preset = data.get("preset")
    if raw_preset is not None:
        if not isinstance(raw_preset, str):
            raise ConfigError(f"{source}: 'preset' must be a string")
        try:
            base = preset(raw_preset)
        except ConfigError as e:
            raise ConfigError(f"{source}: {e}") from e

    changes: dict[str, Any] = {}
    for key, value in data.items():
        if key == "preset":
            continue
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            raise ConfigError(f"{source}: unknown option '{key}'")
        if not isinstance(value, expected):
            raise ConfigError(f"{source}: '{key}' must be a {expected.__name__}, got {type(value).__name__}")
        changes[key] = value

    try:
        return base.with_options(**changes)
    except ConfigError as e:
        raise ConfigError(f"{source}: {e}") from e


def load_config(path: Path) -> MatcherConfig:
    if not path.exists():
        return MatcherConfig()
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e
    return parse_config_obj(obj, source=str(path))
