"""Grammar-engine failure shapes and their translation into ParseError.

The grammar engine reports a rejection in one of five shapes. They are
modelled here as a closed union of frozen dataclasses; ``parse_error_from_engine``
is the one place that maps them onto the domain taxonomy.

``engine_error_from_lark`` adapts Lark exceptions to these shapes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Union

from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)

from .errors import LexicalError, LexicalErrorType, ParseError, ParseErrorKind, ParseErrorType
from .location import Location
from .tokens import DEDENT, INDENT, Tok, terminal_name

logger = logging.getLogger(__name__)

_END = "$END"
_BORROWED_POSITION = frozenset({INDENT, DEDENT})


@dataclass(frozen=True)
class SpannedToken:
    """A token together with the positions it starts and ends at."""
    start: Location
    tok: Tok
    end: Location


# ---------------------------------------------------------------------------
# Failure shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvalidToken:
    """The engine could not form a valid token at *location*."""
    location: Location


@dataclass(frozen=True)
class ExtraToken:
    """Input continued after a complete parse."""
    token: SpannedToken


@dataclass(frozen=True)
class User:
    """A failure raised by the tokenizer and passed through the engine."""
    error: LexicalError


@dataclass(frozen=True)
class UnrecognizedToken:
    """The engine got a token that no rule accepts in the current state."""
    token: SpannedToken
    expected: tuple[str, ...] = ()


@dataclass(frozen=True)
class UnrecognizedEOF:
    """Input ended while the engine still expected more."""
    location: Location
    expected: tuple[str, ...] = ()


EngineError = Union[InvalidToken, ExtraToken, User, UnrecognizedToken, UnrecognizedEOF]


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------

def parse_error_from_engine(err: EngineError) -> ParseError:
    """Translate an engine failure shape into a ParseError.

    Raises TypeError for anything that is not one of the five shapes.
    """
    if isinstance(err, InvalidToken):
        # Reported as end of input; callers already depend on this shape.
        result = ParseError(ParseErrorType(ParseErrorKind.EOF), err.location)
    elif isinstance(err, ExtraToken):
        result = ParseError(ParseErrorType.extra_token(err.token.tok), err.token.start)
    elif isinstance(err, User):
        result = ParseError(ParseErrorType.lexical(err.error.error), err.error.location)
    elif isinstance(err, UnrecognizedToken):
        # Only one possible expected token is worth showing, as CPython's
        # parser does; a set of alternatives is not.
        expected = err.expected[0] if len(err.expected) == 1 else None
        result = ParseError(
            ParseErrorType.unrecognized_token(err.token.tok, expected),
            err.token.start,
        )
    elif isinstance(err, UnrecognizedEOF):
        result = ParseError(ParseErrorType(ParseErrorKind.EOF), err.location)
    else:
        raise TypeError(f"Unknown engine failure: {err!r}")

    logger.debug("Translated %s into %r", type(err).__name__, result)
    return result


# ---------------------------------------------------------------------------
# Lark adapter
# ---------------------------------------------------------------------------

def _expected_names(names: Iterable[str] | None) -> tuple[str, ...]:
    return tuple(sorted(terminal_name(n) for n in (names or ())))


def _lark_expected(exc: UnexpectedToken) -> set[str]:
    # `accepts` is computed after reductions; `expected` only lists the
    # terminals of the state the token arrived in
    accepts = getattr(exc, "accepts", None)
    return set(accepts or exc.expected or ())


def _spanned(token) -> SpannedToken:
    tok = Tok.from_lark(token)
    start = Location.of(token)
    end_line = getattr(token, "end_line", None)
    end_column = getattr(token, "end_column", None)
    if isinstance(end_line, int) and isinstance(end_column, int):
        end = Location(row=end_line, column=end_column)
        if tok in _BORROWED_POSITION:
            # Indent/dedent borrow the newline token's span; they start where it ends
            start = end
    else:
        end = start
    return SpannedToken(start=start, tok=tok, end=end)


def engine_error_from_lark(exc: UnexpectedInput, eof_location: Location | None = None) -> EngineError:
    """Map a Lark parse exception onto an engine failure shape.

    *eof_location* is used where Lark has no position for the end of input.
    """
    if isinstance(exc, UnexpectedCharacters):
        location = Location.of(exc, default=eof_location)
        error = LexicalError(LexicalErrorType.unrecognized_token(exc.char), location)
        return User(error)

    if isinstance(exc, UnexpectedToken):
        expected = _lark_expected(exc)
        if exc.token.type == _END:
            return UnrecognizedEOF(
                location=Location.of(exc.token, default=eof_location),
                expected=_expected_names(expected),
            )
        if expected == {_END}:
            return ExtraToken(_spanned(exc.token))
        return UnrecognizedToken(_spanned(exc.token), _expected_names(expected))

    if isinstance(exc, UnexpectedEOF):
        return UnrecognizedEOF(
            location=eof_location or Location(),
            expected=_expected_names(exc.expected),
        )

    return InvalidToken(Location.of(exc, default=eof_location))
