"""CLI entry point for guidelint.

Usage:
    guidelint check src/ --format json
    guidelint rules --language css
    guidelint cache --clear
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_USAGE = 2


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="guidelint",
        description="Lint HTML, CSS and JavaScript against front-end authoring conventions.",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"guidelint {__version__}",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="Lint files and directories")
    p_check.add_argument("paths", nargs="+", type=Path, help="Files or directories to lint")
    p_check.add_argument("--config", "-c", type=Path, default=None, help="Config file (guidelint.json)")
    p_check.add_argument(
        "--format",
        "-f",
        dest="fmt",
        choices=["text", "json", "html"],
        default="text",
        help="Report format",
    )
    p_check.add_argument("--output", "-o", type=Path, default=None, help="Write the report to a file")
    p_check.add_argument("--no-cache", action="store_true", help="Do not read or write the result cache")
    p_check.add_argument("--strict", action="store_true", help="Fail on warnings as well as errors")

    p_rules = sub.add_parser("rules", help="List available rules")
    p_rules.add_argument("--language", "-l", choices=["html", "css", "js", "text"], help="Filter by language")

    p_cache = sub.add_parser("cache", help="Show cache info or clear cache")
    p_cache.add_argument("--clear", action="store_true", help="Clear the cache")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "check":
        return _cmd_check(args)
    if args.cmd == "rules":
        return _cmd_rules(args)
    if args.cmd == "cache":
        return _cmd_cache(args)

    parser.print_help()
    return EXIT_USAGE


def _cmd_check(args: Any) -> int:
    from .config import CACHE_DIR, load_config
    from .engine import lint_paths
    from .files.cache import ResultCache
    from .report.formatters import format_report, write_report

    try:
        config = load_config(args.config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    cache = None if args.no_cache else ResultCache(CACHE_DIR)

    try:
        report = lint_paths(args.paths, config=config, cache=cache)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.output:
        try:
            path = write_report(report, args.output, args.fmt)
        except OSError as e:
            print(f"Error: cannot write report: {e}", file=sys.stderr)
            return EXIT_USAGE
        print(f"✓ Report written: {path}")
        if args.fmt != "text":
            print(format_report(report, "text").splitlines()[-1])
    else:
        sys.stdout.write(format_report(report, args.fmt))

    if report.error_count:
        return EXIT_VIOLATIONS
    if args.strict and report.warning_count:
        return EXIT_VIOLATIONS
    return EXIT_OK


def _cmd_rules(args: Any) -> int:
    from .engine import get_engine

    rules = get_engine().rules
    if args.language:
        rules = [r for r in rules if r.language == args.language]

    for rule in rules:
        print(f"  {rule.id:28} {rule.language:5} {rule.default_severity:8} {rule.description}")
    return EXIT_OK


def _cmd_cache(args: Any) -> int:
    from .config import CACHE_DIR
    from .files.cache import ResultCache

    cache = ResultCache(CACHE_DIR)
    cache_dir = cache.cache_dir

    if args.clear:
        try:
            cache.clear()
        except OSError as e:
            print(f"Error: cannot clear {cache_dir}: {e}", file=sys.stderr)
            return EXIT_USAGE
        print(f"Cleared cache: {cache_dir}")
        return EXIT_OK

    entries, total_size = cache.stats()
    print(f"Result cache: {cache_dir}")
    print(f"Cached results: {entries} ({total_size / 1024:.1f} KiB)")
    return EXIT_OK


if __name__ == "__main__":
    app()
