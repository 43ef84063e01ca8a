"""Lark-based Python parser that reports failures as ParseError."""

from __future__ import annotations

import logging
import threading

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from .engine import User, engine_error_from_lark, parse_error_from_engine
from .errors import FStringError, FStringErrorType, LexicalError, ParseError
from .fstring import scan_fstring, split_string_literal
from .indenter import Indenter
from .location import Location
from .mode import Mode

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Grammar loading (cached per thread; the indenter keeps state while parsing)
# ---------------------------------------------------------------------------

_START_RULES = [mode.start_rule for mode in Mode]
_local = threading.local()


def _get_parser() -> Lark:
    parser = getattr(_local, "parser", None)
    if parser is None:
        logger.debug("Building Python LALR parser for %s", threading.current_thread().name)
        parser = Lark.open_from_package(
            "lark",
            "python.lark",
            ["grammars"],
            parser="lalr",
            postlex=Indenter(),
            start=_START_RULES,
        )
        _local.parser = parser
    return parser


# ---------------------------------------------------------------------------
# F-string checks
# ---------------------------------------------------------------------------

def _is_string(token) -> bool:
    return isinstance(token, Token) and token.type in ("STRING", "LONG_STRING")


def _check_fstrings(tree: Tree) -> None:
    for token in tree.scan_values(_is_string):
        prefix, body = split_string_literal(str(token))
        if "f" not in prefix:
            continue
        location = Location.of(token)
        for expression in scan_fstring(body, location):
            try:
                parse(f"({expression})", Mode.STATEMENT)
            except ParseError as e:
                raise FStringError(FStringErrorType.invalid_expression(e.error), location) from e


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse(source: str, mode: Mode | str = Mode.PROGRAM) -> Tree:
    """Parse Python source and return the Lark parse tree.

    *mode* is a Mode or one of "exec", "eval", "single".

    Raises ParseError on syntax errors, and ModeParseError for an unknown
    mode name.
    """
    if isinstance(mode, str):
        mode = Mode.from_str(mode)
    text = source if source.endswith("\n") else source + "\n"

    try:
        tree = _get_parser().parse(text, start=mode.start_rule)
        _check_fstrings(tree)
    except UnexpectedInput as e:
        err = engine_error_from_lark(e, eof_location=Location.end_of(text))
        raise parse_error_from_engine(err) from e
    except LexicalError as e:
        raise parse_error_from_engine(User(e)) from e
    except FStringError as e:
        raise parse_error_from_engine(e.to_engine_error()) from e

    logger.debug("Parsed %d characters in %s mode", len(source), mode.name)
    return tree
