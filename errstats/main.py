#!/usr/bin/env python3
"""errstats/main.py — command-line entry point.

Usage examples
--------------
    # Statistics for the package in the current directory
    errstats .

    # Every package of a module, dependencies included
    errstats --all ./...

    # Named files, machine-readable output
    errstats --format json main.go util.go

    # Trace every classified conditional
    errstats --loglevel debug ./...

Exit codes
----------
    0   Success.
    1   Load failure (bad pattern, unparsable source) or an unknown
        log level.

The module doubles as ``python -m errstats`` via ``errstats/__main__.py``.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from typing import List, Optional, Sequence

from errstats import __version__, analyze
from errstats.config import OUTPUT_FORMATS, AnalysisConfig, parse_log_level
from errstats.errors import EXIT_ERROR, EXIT_OK, ConfigError, ErrstatsError
from errstats.stats import render_json, render_report

_log = logging.getLogger("errstats")

# handler installed by the last _configure_logging call
_cli_handler: Optional[logging.Handler] = None


def _configure_logging(level: int) -> None:
    """Point the ``errstats`` logger at the current stderr."""
    global _cli_handler
    root = logging.getLogger("errstats")
    root.setLevel(level)
    if _cli_handler is not None:
        root.removeHandler(_cli_handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(handler)
    _cli_handler = handler


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="errstats",
        description=(
            "Measure how Go code checks errors: how many conditionals test an\n"
            "error value against nil, and how often that value is named 'err'."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              errstats .
              errstats --all ./...
              errstats --format json main.go
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--loglevel", "-loglevel",
        default="info",
        metavar="LEVEL",
        help="Log level: panic, fatal, error, warn, info, debug, trace (default: info).",
    )
    parser.add_argument(
        "--all", "-all",
        dest="include_transitive",
        action="store_true",
        help="Include statistics for all dependencies, not just the named packages.",
    )
    parser.add_argument(
        "--format",
        choices=list(OUTPUT_FORMATS),
        default="text",
        help="Report format (default: text).",
    )
    parser.add_argument(
        "--full-report",
        action="store_true",
        help="Print the statistics even when double-nil comparisons are found.",
    )
    parser.add_argument(
        "--tests",
        dest="include_tests",
        action="store_true",
        help="Also load _test.go files.",
    )
    parser.add_argument(
        "--err-name",
        dest="error_var_name",
        default="err",
        metavar="NAME",
        help="Conventional error variable name (default: err).",
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        metavar="PATTERN",
        help="Go files, directories, import paths or ./... patterns.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the errstats CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        level = parse_log_level(args.loglevel)
    except ConfigError as exc:
        print(f"errstats: {exc}", file=sys.stderr)
        return EXIT_ERROR
    _configure_logging(level)

    config = AnalysisConfig(
        include_transitive=args.include_transitive,
        log_level=args.loglevel,
        error_var_name=args.error_var_name,
        include_tests=args.include_tests,
        output_format=args.format,
        full_report=args.full_report,
    )
    problems: List[str] = config.validate()
    if problems:
        for problem in problems:
            print(f"errstats: {problem}", file=sys.stderr)
        return EXIT_ERROR

    try:
        counters = analyze(args.patterns, config)
    except ErrstatsError as exc:
        print(f"errstats: error loading packages: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130

    if config.output_format == "json":
        sys.stdout.write(render_json(counters))
    else:
        sys.stdout.write(render_report(counters, config.full_report, config.error_var_name))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
