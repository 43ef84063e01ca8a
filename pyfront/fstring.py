"""Scanner for the replacement fields of f-string literals.

``scan_fstring`` checks brace structure, conversion flags and nesting, and
returns the source text of every interpolated expression. Parsing those
expressions is left to the caller.
"""

from __future__ import annotations

from .errors import FStringError, FStringErrorKind, FStringErrorType
from .location import Location

_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_CONVERSIONS = frozenset("sra")
_MAX_DEPTH = 2


def split_string_literal(literal: str) -> tuple[str, str]:
    """Split a string token into its lowercased prefix and its body."""
    quote_at = min(i for i in (literal.find('"'), literal.find("'")) if i >= 0)
    prefix = literal[:quote_at].lower()
    rest = literal[quote_at:]
    width = 3 if rest[:3] in ('"""', "'''") else 1
    return prefix, rest[width:-width]


class _Scanner:

    def __init__(self, text: str, location: Location):
        self.text = text
        self.pos = 0
        self.location = location
        self.expressions: list[str] = []

    def fail(self, kind: FStringErrorKind) -> None:
        raise FStringError(FStringErrorType(kind), self.location)

    def peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else ""

    def literal(self, depth: int, in_spec: bool) -> None:
        # In a format spec, stops on the '}' that closes the enclosing field
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "{":
                if not in_spec and self.peek(1) == "{":
                    self.pos += 2
                    continue
                self.pos += 1
                self.field(depth)
            elif ch == "}":
                if in_spec:
                    return
                if self.peek(1) == "}":
                    self.pos += 2
                    continue
                self.fail(FStringErrorKind.UNOPENED_RBRACE)
            else:
                self.pos += 1
        if in_spec:
            self.fail(FStringErrorKind.UNCLOSED_LBRACE)

    def field(self, depth: int) -> None:
        if depth >= _MAX_DEPTH:
            self.fail(FStringErrorKind.EXPRESSION_NESTED_TOO_DEEPLY)

        start = self.pos
        closers: list[str] = []
        quote = ""
        while True:
            ch = self.peek()
            if not ch:
                self.fail(FStringErrorKind.UNCLOSED_LBRACE)
            if quote:
                if ch == quote:
                    quote = ""
            elif ch in "'\"":
                quote = ch
            elif ch in _CLOSERS:
                closers.append(_CLOSERS[ch])
            elif ch in ")]}" and closers:
                if ch != closers.pop():
                    self.fail(FStringErrorKind.MISMATCHED_DELIMITER)
            elif ch in ")]":
                self.fail(FStringErrorKind.MISMATCHED_DELIMITER)
            elif not closers and (ch in ":}" or (ch == "!" and self.peek(1) != "=")):
                break
            self.pos += 1

        self.expressions.append(self.expression(self.text[start:self.pos]))

        if self.peek() == "!":
            if self.peek(1) not in _CONVERSIONS:
                self.fail(FStringErrorKind.INVALID_CONVERSION_FLAG)
            self.pos += 2
            if self.peek() not in (":", "}"):
                self.fail(FStringErrorKind.EXPECTED_RBRACE)
        if self.peek() == ":":
            self.pos += 1
            self.literal(depth + 1, in_spec=True)
        self.pos += 1  # closing '}'

    def expression(self, source: str) -> str:
        # f"{x=}" echoes the expression; the '=' is not part of it
        stripped = source.rstrip()
        if stripped.endswith("=") and not stripped.endswith(("==", "!=", "<=", ">=")):
            source = stripped[:-1]
        if not source.strip():
            self.fail(FStringErrorKind.EMPTY_EXPRESSION)
        return source


def scan_fstring(body: str, location: Location) -> list[str]:
    """Return the expressions interpolated by an f-string body.

    Raises FStringError at *location* when the body is malformed.
    """
    scanner = _Scanner(body, location)
    scanner.literal(depth=0, in_spec=False)
    return scanner.expressions
