"""Indentation post-lexer that reports failures as LexicalError."""

from __future__ import annotations

from typing import Iterator

from lark import Token
from lark.indenter import DedentError, PythonIndenter

from .errors import LexicalError, LexicalErrorKind, LexicalErrorType
from .location import Location


def _indent_prefix(token: Token) -> str:
    last_line = token.rsplit("\n", 1)[-1]
    return last_line[: len(last_line) - len(last_line.lstrip(" \t"))]


def _width(prefix: str, tab_len: int) -> int:
    column = 0
    for ch in prefix:
        if ch == "\t":
            column = (column // tab_len + 1) * tab_len
        else:
            column += 1
    return column


def _compare(a: int, b: int) -> int:
    return (a > b) - (a < b)


def _inconsistent(prefix: str, previous: str, tab_len: int) -> bool:
    """True when the two prefixes order differently at tab size *tab_len* and 1."""
    return _compare(_width(prefix, tab_len), _width(previous, tab_len)) != _compare(
        _width(prefix, 1), _width(previous, 1)
    )


class Indenter(PythonIndenter):
    """Python indenter whose failures carry a source location."""

    def __init__(self, tab_len: int = 8):
        super().__init__()
        self.tab_len = tab_len
        self._previous_prefix = ""

    def process(self, stream):
        self._previous_prefix = ""
        return super().process(stream)

    def handle_NL(self, token: Token) -> Iterator[Token]:
        if self.paren_level > 0:
            yield from super().handle_NL(token)
            return

        location = Location(row=token.end_line or 1, column=token.end_column or 1)
        prefix = _indent_prefix(token)
        if _inconsistent(prefix, self._previous_prefix, self.tab_len):
            raise LexicalError(LexicalErrorType(LexicalErrorKind.TAB_ERROR), location)
        self._previous_prefix = prefix

        try:
            yield from super().handle_NL(token)
        except DedentError as e:
            raise LexicalError(
                LexicalErrorType(LexicalErrorKind.INDENTATION_ERROR), location,
            ) from e
