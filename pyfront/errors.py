"""Error taxonomy for the pyfront lexer/parser pipeline.

Three closed families of failure reasons, each paired with a Location:

- ``LexicalErrorType``  - why the tokenizer refused the input
- ``FStringErrorType``  - why an f-string literal is malformed
- ``ParseErrorType``    - why the grammar engine rejected the token stream

A reason is a frozen dataclass whose ``kind`` picks the variant; the payload
fields that variant needs are validated on construction, so no reason can
carry a payload that does not belong to its kind. The located errors
(``LexicalError``, ``FStringError``, ``ParseError``) are exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from .location import Location
from .tokens import INDENT, Tok

if TYPE_CHECKING:
    from .engine import User


def _check_payload(kind: Enum, reason: Any, payloads: dict[Enum, tuple[str, ...]],
                   required: dict[Enum, tuple[str, ...]], fields: tuple[str, ...]) -> None:
    allowed = payloads.get(kind, ())
    for name in fields:
        value = getattr(reason, name)
        if value is not None and name not in allowed:
            raise ValueError(f"{kind.value} does not take a {name!r} payload")
        if value is None and name in required.get(kind, ()):
            raise ValueError(f"{kind.value} requires a {name!r} payload")


# ---------------------------------------------------------------------------
# Lexical errors
# ---------------------------------------------------------------------------

class LexicalErrorKind(Enum):
    STRING_ERROR = "StringError"
    UNICODE_ERROR = "UnicodeError"
    NESTING_ERROR = "NestingError"
    INDENTATION_ERROR = "IndentationError"
    TAB_ERROR = "TabError"
    DEFAULT_ARGUMENT_ERROR = "DefaultArgumentError"
    POSITIONAL_ARGUMENT_ERROR = "PositionalArgumentError"
    DUPLICATE_KEYWORD_ARGUMENT_ERROR = "DuplicateKeywordArgumentError"
    UNRECOGNIZED_TOKEN = "UnrecognizedToken"
    FSTRING_ERROR = "FStringError"
    LINE_CONTINUATION_ERROR = "LineContinuationError"
    EOF = "EOF"
    OTHER_ERROR = "OtherError"


_LEXICAL_MESSAGES: dict[LexicalErrorKind, str] = {
    LexicalErrorKind.STRING_ERROR: "Got unexpected string",
    LexicalErrorKind.UNICODE_ERROR: "Got unexpected unicode",
    LexicalErrorKind.NESTING_ERROR: "Got unexpected nesting",
    LexicalErrorKind.INDENTATION_ERROR: "unindent does not match any outer indentation level",
    LexicalErrorKind.TAB_ERROR: "inconsistent use of tabs and spaces in indentation",
    LexicalErrorKind.DEFAULT_ARGUMENT_ERROR: "non-default argument follows default argument",
    LexicalErrorKind.DUPLICATE_KEYWORD_ARGUMENT_ERROR: "keyword argument repeated",
    LexicalErrorKind.POSITIONAL_ARGUMENT_ERROR: "positional argument follows keyword argument",
    LexicalErrorKind.LINE_CONTINUATION_ERROR: "unexpected character after line continuation character",
    LexicalErrorKind.EOF: "unexpected EOF while parsing",
}

_LEXICAL_PAYLOADS: dict[LexicalErrorKind, tuple[str, ...]] = {
    LexicalErrorKind.UNRECOGNIZED_TOKEN: ("tok",),
    LexicalErrorKind.FSTRING_ERROR: ("fstring_error",),
    LexicalErrorKind.OTHER_ERROR: ("message",),
}


@dataclass(frozen=True)
class LexicalErrorType:
    """A reason the tokenizer could not produce a token stream."""
    kind: LexicalErrorKind
    tok: str | None = None                           # UNRECOGNIZED_TOKEN
    fstring_error: FStringErrorType | None = None    # FSTRING_ERROR
    message: str | None = None                       # OTHER_ERROR

    def __post_init__(self) -> None:
        _check_payload(self.kind, self, _LEXICAL_PAYLOADS, _LEXICAL_PAYLOADS,
                       ("tok", "fstring_error", "message"))
        if self.tok is not None and len(self.tok) != 1:
            raise ValueError(f"UnrecognizedToken takes a single character, got {self.tok!r}")

    @classmethod
    def unrecognized_token(cls, tok: str) -> LexicalErrorType:
        return cls(LexicalErrorKind.UNRECOGNIZED_TOKEN, tok=tok)

    @classmethod
    def fstring(cls, error: FStringErrorType) -> LexicalErrorType:
        return cls(LexicalErrorKind.FSTRING_ERROR, fstring_error=error)

    @classmethod
    def other(cls, message: str) -> LexicalErrorType:
        return cls(LexicalErrorKind.OTHER_ERROR, message=message)

    @property
    def cause(self) -> FStringErrorType | None:
        return self.fstring_error

    def __str__(self) -> str:
        if self.kind is LexicalErrorKind.FSTRING_ERROR:
            return f"Got error in f-string: {self.fstring_error}"
        if self.kind is LexicalErrorKind.UNRECOGNIZED_TOKEN:
            return f"Got unexpected token {self.tok}"
        if self.kind is LexicalErrorKind.OTHER_ERROR:
            return self.message
        return _LEXICAL_MESSAGES[self.kind]


# ---------------------------------------------------------------------------
# F-string errors
# ---------------------------------------------------------------------------

class FStringErrorKind(Enum):
    UNCLOSED_LBRACE = "UnclosedLbrace"
    UNOPENED_RBRACE = "UnopenedRbrace"
    EXPECTED_RBRACE = "ExpectedRbrace"
    INVALID_EXPRESSION = "InvalidExpression"
    INVALID_CONVERSION_FLAG = "InvalidConversionFlag"
    EMPTY_EXPRESSION = "EmptyExpression"
    MISMATCHED_DELIMITER = "MismatchedDelimiter"
    EXPRESSION_NESTED_TOO_DEEPLY = "ExpressionNestedTooDeeply"


_FSTRING_MESSAGES: dict[FStringErrorKind, str] = {
    FStringErrorKind.UNCLOSED_LBRACE: "Unclosed '{'",
    FStringErrorKind.UNOPENED_RBRACE: "Unopened '}'",
    FStringErrorKind.EXPECTED_RBRACE: "Expected '}' after conversion flag.",
    FStringErrorKind.INVALID_CONVERSION_FLAG: "Invalid conversion flag",
    FStringErrorKind.EMPTY_EXPRESSION: "Empty expression",
    FStringErrorKind.MISMATCHED_DELIMITER: "Mismatched delimiter",
    FStringErrorKind.EXPRESSION_NESTED_TOO_DEEPLY: "expressions nested too deeply",
}

_FSTRING_PAYLOADS: dict[FStringErrorKind, tuple[str, ...]] = {
    FStringErrorKind.INVALID_EXPRESSION: ("expression_error",),
}


@dataclass(frozen=True)
class FStringErrorType:
    """A reason an f-string literal could not be parsed.

    ``INVALID_EXPRESSION`` holds the fully resolved parse reason of the
    interpolated expression, never a raw f-string reason.
    """
    kind: FStringErrorKind
    expression_error: ParseErrorType | None = None   # INVALID_EXPRESSION

    def __post_init__(self) -> None:
        _check_payload(self.kind, self, _FSTRING_PAYLOADS, _FSTRING_PAYLOADS,
                       ("expression_error",))

    @classmethod
    def invalid_expression(cls, error: ParseErrorType) -> FStringErrorType:
        return cls(FStringErrorKind.INVALID_EXPRESSION, expression_error=error)

    @property
    def cause(self) -> ParseErrorType | None:
        return self.expression_error

    def __str__(self) -> str:
        if self.kind is FStringErrorKind.INVALID_EXPRESSION:
            return f"Invalid expression: {self.expression_error}"
        return _FSTRING_MESSAGES[self.kind]


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

class ParseErrorKind(Enum):
    EOF = "EOF"
    EXTRA_TOKEN = "ExtraToken"
    INVALID_TOKEN = "InvalidToken"
    UNRECOGNIZED_TOKEN = "UnrecognizedToken"
    LEXICAL = "Lexical"


_PARSE_PAYLOADS: dict[ParseErrorKind, tuple[str, ...]] = {
    ParseErrorKind.EXTRA_TOKEN: ("token",),
    ParseErrorKind.UNRECOGNIZED_TOKEN: ("token", "expected"),
    ParseErrorKind.LEXICAL: ("lexical_error",),
}

_PARSE_REQUIRED: dict[ParseErrorKind, tuple[str, ...]] = {
    ParseErrorKind.EXTRA_TOKEN: ("token",),
    ParseErrorKind.UNRECOGNIZED_TOKEN: ("token",),
    ParseErrorKind.LEXICAL: ("lexical_error",),
}


@dataclass(frozen=True)
class ParseErrorType:
    """A reason the grammar engine rejected the input.

    ``LEXICAL`` carries a tokenizer reason without its own location; the
    enclosing ParseError already has one.
    """
    kind: ParseErrorKind
    token: Tok | None = None
    expected: str | None = None      # single unambiguous expectation, if any
    lexical_error: LexicalErrorType | None = None

    def __post_init__(self) -> None:
        _check_payload(self.kind, self, _PARSE_PAYLOADS, _PARSE_REQUIRED,
                       ("token", "expected", "lexical_error"))

    @classmethod
    def extra_token(cls, token: Tok) -> ParseErrorType:
        return cls(ParseErrorKind.EXTRA_TOKEN, token=token)

    @classmethod
    def unrecognized_token(cls, token: Tok, expected: str | None = None) -> ParseErrorType:
        return cls(ParseErrorKind.UNRECOGNIZED_TOKEN, token=token, expected=expected)

    @classmethod
    def lexical(cls, error: LexicalErrorType) -> ParseErrorType:
        return cls(ParseErrorKind.LEXICAL, lexical_error=error)

    @property
    def cause(self) -> LexicalErrorType | None:
        return self.lexical_error

    def is_indentation_error(self) -> bool:
        if self.kind is ParseErrorKind.LEXICAL:
            return self.lexical_error.kind is LexicalErrorKind.INDENTATION_ERROR
        if self.kind is ParseErrorKind.UNRECOGNIZED_TOKEN:
            return self.token == INDENT or self.expected == "Indent"
        return False

    def is_tab_error(self) -> bool:
        return (
            self.kind is ParseErrorKind.LEXICAL
            and self.lexical_error.kind is LexicalErrorKind.TAB_ERROR
        )

    def __str__(self) -> str:
        if self.kind is ParseErrorKind.EOF:
            return "Got unexpected EOF"
        if self.kind is ParseErrorKind.EXTRA_TOKEN:
            return f"Got extraneous token: {self.token!r}"
        if self.kind is ParseErrorKind.INVALID_TOKEN:
            return "Got invalid token"
        if self.kind is ParseErrorKind.UNRECOGNIZED_TOKEN:
            if self.token == INDENT:
                return "unexpected indent"
            if self.expected == "Indent":
                return "expected an indented block"
            return f"Got unexpected token {self.token}"
        return str(self.lexical_error)


# ---------------------------------------------------------------------------
# Located errors
# ---------------------------------------------------------------------------

class PyFrontError(Exception):
    """Base error: a failure reason and the location it was detected at."""

    def __init__(self, error: Any, location: Location):
        self._error = error
        self._location = location
        super().__init__(error, location)

    @property
    def error(self) -> Any:
        return self._error

    @property
    def location(self) -> Location:
        return self._location

    @property
    def cause(self) -> Any:
        """The nested reason, if any. For diagnostics only."""
        return self._error.cause

    def __str__(self) -> str:
        return f"{self._error} at {self._location}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error={self._error!r}, location={self._location!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._error == other._error and self._location == other._location

    def __hash__(self) -> int:
        return hash((type(self), self._error, self._location))


class LexicalError(PyFrontError):
    """Raised when the tokenizer rejects the input."""


class FStringError(PyFrontError):
    """Raised when an f-string literal is malformed."""

    def to_engine_error(self) -> User:
        """Wrap as a lexical failure so it flows through the parser channel."""
        from .engine import User
        return User(LexicalError(LexicalErrorType.fstring(self._error), self._location))


class ParseError(PyFrontError):
    """Raised when source code cannot be parsed."""

    @property
    def kind(self) -> ParseErrorKind:
        return self._error.kind

    def is_indentation_error(self) -> bool:
        return self._error.is_indentation_error()

    def is_tab_error(self) -> bool:
        return self._error.is_tab_error()
