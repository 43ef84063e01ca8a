"""Parsing entry points selectable by name."""

from __future__ import annotations

from enum import Enum

_MODE_MESSAGE = 'mode should be "exec", "eval", or "single"'


class ModeParseError(ValueError):
    """Raised for a mode name other than exec, eval or single."""

    def __init__(self) -> None:
        super().__init__(_MODE_MESSAGE)


class Mode(Enum):
    """Which grammar entry point to parse with."""
    PROGRAM = "file_input"
    STATEMENT = "eval_input"

    @property
    def start_rule(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, name: str) -> Mode:
        if name in ("exec", "single"):
            return cls.PROGRAM
        if name == "eval":
            return cls.STATEMENT
        raise ModeParseError()
