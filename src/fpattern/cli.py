from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import MatcherConfig, load_config, preset
from .errors import ConfigError, UsageError
from .lint import lint_patterns
from .markdown import render_filter_markdown, render_lint_markdown
from .patterns import Matcher, PatternSyntaxError
from .selection import filter_names
from .version import __version__


def _config(args: argparse.Namespace) -> MatcherConfig:
    if args.preset:
        cfg = preset(args.preset)
    else:
        cfg = load_config(Path(args.config))

    changes: dict[str, Any] = {}
    if args.delimiters:
        changes["delimiters"] = True
    if args.case_sensitive:
        changes["case_sensitive"] = True
    if args.sub:
        changes["sub_closure"] = args.sub
    if args.debug:
        changes["trace"] = True
    return cfg.with_options(**changes) if changes else cfg


def _names(args: argparse.Namespace) -> list[str]:
    names = list(args.names)
    if args.stdin:
        names.extend(line for line in sys.stdin.read().splitlines() if line)
    if not names:
        raise UsageError("no filenames given (pass NAME arguments or use --stdin)")
    return names


def cmd_match(args: argparse.Namespace) -> int:
    matcher = Matcher(_config(args))
    report = filter_names(args.pattern, _names(args), matcher, validate=not args.no_validate)

    if args.format == "json":
        payload = {
            "pattern": report.pattern,
            "matched": report.matched,
            "unmatched": report.unmatched,
            "version": __version__,
        }
        print(json.dumps(payload, indent=2))
    elif args.format == "markdown":
        print(render_filter_markdown(report, include_unmatched=args.show_unmatched))
    else:
        for name in report.matched:
            print(name)

    return 0 if report.matched else 1


def cmd_check(args: argparse.Namespace) -> int:
    matcher = Matcher(_config(args))
    res = lint_patterns(args.patterns, matcher, strict=args.strict)

    if args.format == "json":
        payload = {
            "issues": [
                {
                    "severity": i.severity,
                    "code": i.code,
                    "message": i.message,
                    "pattern": i.pattern,
                    "position": i.position,
                    "hint": i.hint,
                }
                for i in res.issues
            ],
            "version": __version__,
        }
        print(json.dumps(payload, indent=2))
    else:
        print(render_lint_markdown(res, title="Check"))

    return 2 if res.has_errors else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fpattern", description="fpattern - match filenames against extended glob patterns")
    p.add_argument("--config", default=".fpattern.yaml", help="Path to a YAML matcher config (ignored if missing)")
    p.add_argument("--preset", choices=["unix", "dos"], default=None, help="Use a host preset instead of the config file")
    p.add_argument("--delimiters", action="store_true", help="Treat path separators specially")
    p.add_argument("--case-sensitive", action="store_true", help="Compare letters exactly")
    p.add_argument("--sub", default=None, metavar="CHAR", help="Character for the dot-boundary closure (e.g. '~')")
    p.add_argument("--debug", action="store_true", help="Trace validation and matching to stderr")
    p.add_argument("--version", action="version", version=f"fpattern {__version__}")

    sub = p.add_subparsers(dest="cmd", required=True)

    m = sub.add_parser("match", aliases=["filter"], help="Print the filenames a pattern matches")
    m.add_argument("pattern", help="Filename pattern")
    m.add_argument("names", nargs="*", help="Filenames to test")
    m.add_argument("--stdin", action="store_true", help="Read filenames (one per line) from stdin")
    m.add_argument("--format", choices=["text", "json", "markdown"], default="text")
    m.add_argument("--show-unmatched", action="store_true", help="List unmatched names in markdown output")
    m.add_argument("--no-validate", action="store_true", help="Skip pattern validation (malformed patterns match nothing)")
    m.set_defaults(func=cmd_match)

    c = sub.add_parser("check", aliases=["lint"], help="Check patterns for syntax errors and dead sets")
    c.add_argument("patterns", nargs="+", help="Patterns to check")
    c.add_argument("--format", choices=["text", "json"], default="text")
    c.add_argument("--strict", action="store_true", help="Treat warnings as errors")
    c.set_defaults(func=cmd_check)

    return p


def main(argv: list[str] | None = None) -> None:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        if args.debug:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)
        rc = args.func(args)
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        rc = 2
    except ConfigError as e:
        print(f"config error: {e}", file=sys.stderr)
        rc = 2
    except PatternSyntaxError as e:
        print(f"pattern error: {e}", file=sys.stderr)
        rc = 2
    except KeyboardInterrupt:
        rc = 130

    raise SystemExit(rc)
