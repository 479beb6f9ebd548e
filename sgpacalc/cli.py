"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    sgpacalc calc 3:4.0 3:3.0
    sgpacalc calc 3:3.8 4:2.7 --json
    sgpacalc categories
    sgpacalc interactive

Note:
- The interactive UI lives in sgpacalc/interactive.py
- This CLI prints plain text (no rich formatting), except for log lines
"""

from __future__ import annotations

import argparse
import json
import logging

from rich.logging import RichHandler

from sgpacalc.aggregate import AggregationError, calculate_sgpa
from sgpacalc.model import FAIL_CATEGORY, GRADE_THRESHOLDS, SgpaResult
from sgpacalc.store import CourseStore

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """
    Route log records through rich. DEBUG with --verbose, otherwise WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _split_course(token: str) -> tuple[str, str]:
    """
    Split 'CREDITS:GRADE_POINT' into raw text fields.
    A token without ':' is read as credits with a blank grade point.
    """
    credits, sep, grade_point = token.partition(":")
    if not sep:
        return token.strip(), ""
    return credits.strip(), grade_point.strip()


def _store_from_tokens(tokens: list[str]) -> CourseStore:
    store = CourseStore(initial_entry=False)
    for token in tokens:
        credits, grade_point = _split_course(token)
        store.add_course(credits, grade_point)
    return store


def format_result(result: SgpaResult) -> list[str]:
    return [
        f"SGPA: {result.sgpa_text}",
        f"Total credits: {result.total_credits_text}",
        f"Courses: {result.valid_course_count}",
        f"Grade category: {result.grade_category}",
    ]


def _cmd_calc(args: argparse.Namespace) -> int:
    """
    Build a throwaway store from the command line and print its SGPA.
    """
    store = _store_from_tokens(args.courses or [])

    try:
        result = calculate_sgpa(store)
    except AggregationError as e:
        print(str(e))
        return 1

    if args.json:
        print(json.dumps(result.as_dict()))
        return 0

    ignored = len(store) - result.valid_course_count
    for line in format_result(result):
        print(line)
    if ignored:
        print(f"({ignored} course(s) ignored: missing or invalid values)")
    return 0


def _cmd_categories(args: argparse.Namespace) -> int:
    """
    Print the grade category thresholds.
    """
    for threshold, label in GRADE_THRESHOLDS:
        print(f"SGPA >= {threshold:.1f} | {label}")
    print(f"otherwise   | {FAIL_CATEGORY}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="sgpacalc", description="SGPA Calculator CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug log output")
    sub = parser.add_subparsers(dest="command", required=True)

    p_calc = sub.add_parser(
        "calc",
        help="Calculate the SGPA of the given courses",
        epilog="Courses starting with '-' (e.g. -3:4) must follow '--': sgpacalc calc -- -3:4 3:3.5",
    )
    p_calc.add_argument(
        "courses",
        nargs="*",
        metavar="CREDITS:GRADE_POINT",
        help="One course per argument (e.g. 3:3.75); put '--' before courses starting with '-'",
    )
    p_calc.add_argument("--json", action="store_true", help="Print the result as JSON")

    sub.add_parser("categories", help="Show grade category thresholds")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    logger.debug("command=%s", args.command)

    if args.command == "calc":
        raise SystemExit(_cmd_calc(args))
    if args.command == "categories":
        raise SystemExit(_cmd_categories(args))

    if args.command == "interactive":
        from sgpacalc.interactive import run_interactive

        run_interactive()
        raise SystemExit(0)

    raise SystemExit(2)
