"""Tests for pyfront.errors."""

import pickle

import pytest

from pyfront.errors import (
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
from pyfront.location import Location
from pyfront.tokens import INDENT, NEWLINE, Tok


# ---------------------------------------------------------------------------
# Lexical errors
# ---------------------------------------------------------------------------

LEXICAL_MESSAGES = [
    (LexicalErrorKind.STRING_ERROR, "Got unexpected string"),
    (LexicalErrorKind.UNICODE_ERROR, "Got unexpected unicode"),
    (LexicalErrorKind.NESTING_ERROR, "Got unexpected nesting"),
    (LexicalErrorKind.INDENTATION_ERROR, "unindent does not match any outer indentation level"),
    (LexicalErrorKind.TAB_ERROR, "inconsistent use of tabs and spaces in indentation"),
    (LexicalErrorKind.DEFAULT_ARGUMENT_ERROR, "non-default argument follows default argument"),
    (LexicalErrorKind.DUPLICATE_KEYWORD_ARGUMENT_ERROR, "keyword argument repeated"),
    (LexicalErrorKind.POSITIONAL_ARGUMENT_ERROR, "positional argument follows keyword argument"),
    (LexicalErrorKind.LINE_CONTINUATION_ERROR,
     "unexpected character after line continuation character"),
    (LexicalErrorKind.EOF, "unexpected EOF while parsing"),
]


class TestLexicalErrorType:

    @pytest.mark.parametrize("kind,message", LEXICAL_MESSAGES)
    def test_fixed_messages(self, kind, message):
        assert str(LexicalErrorType(kind)) == message

    def test_unrecognized_token(self):
        assert str(LexicalErrorType.unrecognized_token("$")) == "Got unexpected token $"

    def test_other_error_is_verbatim(self):
        assert str(LexicalErrorType.other("bad escape \\q")) == "bad escape \\q"

    def test_fstring_error(self):
        err = LexicalErrorType.fstring(FStringErrorType(FStringErrorKind.UNCLOSED_LBRACE))
        assert str(err) == "Got error in f-string: Unclosed '{'"

    def test_missing_payload_rejected(self):
        with pytest.raises(ValueError):
            LexicalErrorType(LexicalErrorKind.UNRECOGNIZED_TOKEN)

    def test_foreign_payload_rejected(self):
        with pytest.raises(ValueError):
            LexicalErrorType(LexicalErrorKind.TAB_ERROR, message="tabs")

    def test_token_must_be_one_character(self):
        with pytest.raises(ValueError):
            LexicalErrorType.unrecognized_token("$$")

    def test_cause(self):
        inner = FStringErrorType(FStringErrorKind.EMPTY_EXPRESSION)
        assert LexicalErrorType.fstring(inner).cause is inner
        assert LexicalErrorType(LexicalErrorKind.EOF).cause is None


# ---------------------------------------------------------------------------
# F-string errors
# ---------------------------------------------------------------------------

class TestFStringErrorType:

    @pytest.mark.parametrize("kind,message", [
        (FStringErrorKind.UNCLOSED_LBRACE, "Unclosed '{'"),
        (FStringErrorKind.UNOPENED_RBRACE, "Unopened '}'"),
        (FStringErrorKind.EXPECTED_RBRACE, "Expected '}' after conversion flag."),
        (FStringErrorKind.INVALID_CONVERSION_FLAG, "Invalid conversion flag"),
        (FStringErrorKind.EMPTY_EXPRESSION, "Empty expression"),
        (FStringErrorKind.MISMATCHED_DELIMITER, "Mismatched delimiter"),
        (FStringErrorKind.EXPRESSION_NESTED_TOO_DEEPLY, "expressions nested too deeply"),
    ])
    def test_fixed_messages(self, kind, message):
        assert str(FStringErrorType(kind)) == message

    def test_invalid_expression(self):
        inner = ParseErrorType(ParseErrorKind.EOF)
        err = FStringErrorType.invalid_expression(inner)
        assert str(err) == "Invalid expression: Got unexpected EOF"
        assert err.cause is inner

    def test_invalid_expression_requires_payload(self):
        with pytest.raises(ValueError):
            FStringErrorType(FStringErrorKind.INVALID_EXPRESSION)

    def test_to_engine_error_preserves_nested_reason(self, loc):
        inner = ParseErrorType.unrecognized_token(Tok("RPAR", ")"), None)
        err = FStringError(FStringErrorType.invalid_expression(inner), loc)

        user = err.to_engine_error()

        assert user.error.location == loc
        assert user.error.error.kind is LexicalErrorKind.FSTRING_ERROR
        assert user.error.error.fstring_error.expression_error == inner


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

class TestParseErrorType:

    def test_eof(self):
        assert str(ParseErrorType(ParseErrorKind.EOF)) == "Got unexpected EOF"

    def test_invalid_token(self):
        assert str(ParseErrorType(ParseErrorKind.INVALID_TOKEN)) == "Got invalid token"

    def test_extra_token_uses_debug_form(self, name_tok):
        assert str(ParseErrorType.extra_token(name_tok)) == "Got extraneous token: NAME('spam')"

    def test_unrecognized_token(self, name_tok):
        err = ParseErrorType.unrecognized_token(name_tok, "RPAR")
        assert str(err) == "Got unexpected token 'spam'"

    def test_unexpected_indent(self):
        err = ParseErrorType.unrecognized_token(INDENT, "Newline")
        assert str(err) == "unexpected indent"

    def test_expected_indented_block(self, name_tok):
        err = ParseErrorType.unrecognized_token(name_tok, "Indent")
        assert str(err) == "expected an indented block"

    def test_lexical(self):
        err = ParseErrorType.lexical(LexicalErrorType(LexicalErrorKind.TAB_ERROR))
        assert str(err) == "inconsistent use of tabs and spaces in indentation"

    def test_expected_only_on_unrecognized_token(self, name_tok):
        with pytest.raises(ValueError):
            ParseErrorType(ParseErrorKind.EXTRA_TOKEN, token=name_tok, expected="Indent")

    def test_cause(self):
        lexical = LexicalErrorType(LexicalErrorKind.EOF)
        assert ParseErrorType.lexical(lexical).cause is lexical
        assert ParseErrorType(ParseErrorKind.EOF).cause is None


# ---------------------------------------------------------------------------
# Classification predicates
# ---------------------------------------------------------------------------

NOT_INDENTATION = [
    ParseErrorType(ParseErrorKind.EOF),
    ParseErrorType(ParseErrorKind.INVALID_TOKEN),
    ParseErrorType.extra_token(INDENT),
    ParseErrorType.unrecognized_token(NEWLINE, None),
    ParseErrorType.unrecognized_token(NEWLINE, "Dedent"),
    ParseErrorType.lexical(LexicalErrorType(LexicalErrorKind.TAB_ERROR)),
    ParseErrorType.lexical(LexicalErrorType(LexicalErrorKind.EOF)),
]


class TestPredicates:

    @pytest.mark.parametrize("err", [
        ParseErrorType.lexical(LexicalErrorType(LexicalErrorKind.INDENTATION_ERROR)),
        ParseErrorType.unrecognized_token(INDENT, None),
        ParseErrorType.unrecognized_token(Tok("NAME", "x"), "Indent"),
    ])
    def test_indentation_errors(self, err):
        assert err.is_indentation_error()
        assert not err.is_tab_error()

    @pytest.mark.parametrize("err", NOT_INDENTATION)
    def test_not_indentation_errors(self, err):
        assert not err.is_indentation_error()

    def test_tab_error(self):
        assert ParseErrorType.lexical(LexicalErrorType(LexicalErrorKind.TAB_ERROR)).is_tab_error()

    @pytest.mark.parametrize("err", [
        ParseErrorType(ParseErrorKind.EOF),
        ParseErrorType.unrecognized_token(INDENT, "Indent"),
        ParseErrorType.lexical(LexicalErrorType(LexicalErrorKind.INDENTATION_ERROR)),
        ParseErrorType.lexical(LexicalErrorType.other("tabs")),
    ])
    def test_not_tab_errors(self, err):
        assert not err.is_tab_error()


# ---------------------------------------------------------------------------
# Located errors
# ---------------------------------------------------------------------------

class TestLocatedErrors:

    def test_display(self, loc):
        err = ParseError(ParseErrorType(ParseErrorKind.EOF), loc)
        assert str(err) == "Got unexpected EOF at line 3 column 7"

    def test_lexical_error_display(self):
        err = LexicalError(LexicalErrorType.unrecognized_token("?"), Location(1, 2))
        assert str(err) == "Got unexpected token ? at line 1 column 2"

    def test_structural_equality(self, loc):
        a = ParseError(ParseErrorType(ParseErrorKind.EOF), loc)
        b = ParseError(ParseErrorType(ParseErrorKind.EOF), Location(3, 7))
        assert a == b
        assert hash(a) == hash(b)
        assert a != ParseError(ParseErrorType(ParseErrorKind.EOF), Location(3, 8))

    def test_different_families_are_not_equal(self, loc):
        reason = LexicalErrorType(LexicalErrorKind.EOF)
        assert LexicalError(reason, loc) != FStringError(reason, loc)

    def test_is_exception(self, loc):
        with pytest.raises(PyFrontError):
            raise ParseError(ParseErrorType(ParseErrorKind.EOF), loc)

    def test_read_only(self, loc):
        err = ParseError(ParseErrorType(ParseErrorKind.EOF), loc)
        with pytest.raises(AttributeError):
            err.location = Location()

    def test_pickle_round_trip(self, loc):
        err = ParseError(ParseErrorType.unrecognized_token(INDENT, "Indent"), loc)
        assert pickle.loads(pickle.dumps(err)) == err

    def test_parse_error_forwards_to_reason(self, loc):
        err = ParseError(ParseErrorType.unrecognized_token(INDENT), loc)
        assert err.kind is ParseErrorKind.UNRECOGNIZED_TOKEN
        assert err.is_indentation_error()
        assert not err.is_tab_error()

    def test_cause_chain(self, loc):
        inner = ParseErrorType(ParseErrorKind.EOF)
        fstring = FStringErrorType.invalid_expression(inner)
        err = ParseError(ParseErrorType.lexical(LexicalErrorType.fstring(fstring)), loc)

        chain = []
        cause = err.cause
        while cause is not None:
            chain.append(cause)
            cause = cause.cause

        assert chain == [LexicalErrorType.fstring(fstring), fstring, inner]
