"""CLI for pyfront: check Python sources and inspect parse trees."""

from __future__ import annotations

import argparse
import logging
import sys

from .errors import ParseError, ParseErrorKind, PyFrontError
from .mode import Mode, ModeParseError
from .parser import parse


def _mode_arg(value: str) -> Mode:
    try:
        return Mode.from_str(value)
    except ModeParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pyfront",
        description="Parse Python sources and report classified syntax errors",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # check
    check_p = sub.add_parser("check", help="Parse a file and report the first syntax error")
    check_p.add_argument("file", help="Input .py file")
    check_p.add_argument("--mode", type=_mode_arg, default=Mode.PROGRAM, help="exec, eval or single")
    check_p.add_argument(
        "--interactive",
        action="store_true",
        help="Report incomplete input (exit 2) separately from hard errors",
    )

    # tree
    tree_p = sub.add_parser("tree", help="Show the parse tree (debug)")
    tree_p.add_argument("file", help="Input .py file")
    tree_p.add_argument("--mode", type=_mode_arg, default=Mode.PROGRAM, help="exec, eval or single")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 1

    try:
        source = _read_file(args.file)
        if args.command == "check":
            return _cmd_check(source, args.mode, interactive=args.interactive)
        elif args.command == "tree":
            return _cmd_tree(source, args.mode)
    except FileNotFoundError:
        print(f"Error: file not found: {args.file}", file=sys.stderr)
        return 1
    except PyFrontError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def _read_file(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def _is_incomplete(error: ParseError) -> bool:
    """Whether more input could turn *error* into a valid program."""
    return error.kind is ParseErrorKind.EOF or error.is_indentation_error()


def _cmd_check(source: str, mode: Mode, interactive: bool = False) -> int:
    try:
        parse(source, mode)
    except ParseError as e:
        if interactive and _is_incomplete(e):
            print(f"incomplete: {e}", file=sys.stderr)
            return 2
        raise
    print("OK")
    return 0


def _cmd_tree(source: str, mode: Mode) -> int:
    tree = parse(source, mode)
    print(tree.pretty())
    return 0


if __name__ == "__main__":
    sys.exit(main())
