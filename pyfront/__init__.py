"""pyfront: error classification for a Python-compatible parser front-end."""

from .engine import (
    EngineError,
    ExtraToken,
    InvalidToken,
    SpannedToken,
    UnrecognizedEOF,
    UnrecognizedToken,
    User,
    engine_error_from_lark,
    parse_error_from_engine,
)
from .errors import (
    FStringError,
    FStringErrorKind,
    FStringErrorType,
    LexicalError,
    LexicalErrorKind,
    LexicalErrorType,
    ParseError,
    ParseErrorKind,
    ParseErrorType,
    PyFrontError,
)
from .fstring import scan_fstring
from .location import Location
from .mode import Mode, ModeParseError
from .parser import parse
from .tokens import DEDENT, END_OF_FILE, INDENT, NEWLINE, Tok

__all__ = [
    "parse",
    "Mode",
    "ModeParseError",
    "Location",
    "Tok",
    "INDENT",
    "DEDENT",
    "NEWLINE",
    "END_OF_FILE",
    "scan_fstring",
    "EngineError",
    "InvalidToken",
    "ExtraToken",
    "User",
    "UnrecognizedToken",
    "UnrecognizedEOF",
    "SpannedToken",
    "parse_error_from_engine",
    "engine_error_from_lark",
    "PyFrontError",
    "LexicalError",
    "LexicalErrorKind",
    "LexicalErrorType",
    "FStringError",
    "FStringErrorKind",
    "FStringErrorType",
    "ParseError",
    "ParseErrorKind",
    "ParseErrorType",
]
