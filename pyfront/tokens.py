"""Parser tokens as they appear inside error payloads.

Tokens come from the grammar engine (Lark). Only what error reporting needs
is kept: the token kind, its source text, a display form for user messages
and a debug form for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# Engine terminal name -> expectation name shown to users
TERMINAL_NAMES: dict[str, str] = {
    "_INDENT": "Indent",
    "_DEDENT": "Dedent",
    "_NEWLINE": "Newline",
    "$END": "EndOfFile",
}

# Tokens whose text is whitespace; their identity is the kind alone
_LAYOUT_KINDS = frozenset(TERMINAL_NAMES.values())


def terminal_name(name: str) -> str:
    """Map an engine terminal name to its expectation name."""
    return TERMINAL_NAMES.get(name, name)


@dataclass(frozen=True, repr=False)
class Tok:
    """A single token: its kind and (for non-layout tokens) its text."""
    kind: str
    value: str = ""

    def __str__(self) -> str:
        if self.value:
            return f"'{self.value}'"
        return self.kind

    def __repr__(self) -> str:
        if self.value:
            return f"{self.kind}({self.value!r})"
        return self.kind

    @classmethod
    def from_lark(cls, token: Any) -> Tok:
        kind = terminal_name(getattr(token, "type", "UNKNOWN"))
        if kind in _LAYOUT_KINDS:
            return cls(kind)
        return cls(kind, str(token))


INDENT = Tok("Indent")
DEDENT = Tok("Dedent")
NEWLINE = Tok("Newline")
END_OF_FILE = Tok("EndOfFile")
