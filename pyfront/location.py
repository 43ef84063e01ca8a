"""Source positions attached to every error."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, order=True)
class Location:
    """A 1-based row/column position in the source text."""
    row: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"line {self.row} column {self.column}"

    @classmethod
    def of(cls, obj: Any, default: Location | None = None) -> Location:
        """Build a Location from anything with ``line``/``column`` attributes.

        Lark tokens and exceptions report unknown positions as ``None``,
        ``'?'`` or ``-1``; those fall back to *default*.
        """
        line = getattr(obj, "line", None)
        column = getattr(obj, "column", None)
        if isinstance(line, int) and isinstance(column, int) and line > 0 and column > 0:
            return cls(row=line, column=column)
        return default if default is not None else cls()

    @classmethod
    def end_of(cls, text: str) -> Location:
        """Position just past the last character of *text*."""
        row = text.count("\n") + 1
        column = len(text) - (text.rfind("\n") + 1) + 1
        return cls(row=row, column=column)
