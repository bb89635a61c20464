import pytest

from jsonstream.errors import (
    Category,
    ErrorCode,
    JsonError,
    custom_error,
    invalid_type,
    io_error,
    parse_line_col,
    syntax_error,
)


@pytest.mark.parametrize(
    "code",
    [
        ErrorCode.EOF_WHILE_PARSING_LIST,
        ErrorCode.EOF_WHILE_PARSING_OBJECT,
        ErrorCode.EOF_WHILE_PARSING_STRING,
        ErrorCode.EOF_WHILE_PARSING_VALUE,
    ],
)
def test_eof_codes_classify_as_eof(code):
    err = syntax_error(code, 1, 1)
    assert err.classify() is Category.EOF
    assert err.is_eof()
    assert not err.is_syntax()


@pytest.mark.parametrize(
    "code",
    [
        ErrorCode.EXPECTED_COLON,
        ErrorCode.INVALID_NUMBER,
        ErrorCode.KEY_MUST_BE_A_STRING,
        ErrorCode.TRAILING_COMMA,
        ErrorCode.RECURSION_LIMIT_EXCEEDED,
        ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE,
    ],
)
def test_syntax_codes_classify_as_syntax(code):
    err = syntax_error(code, 2, 3)
    assert err.classify() is Category.SYNTAX
    assert [err.is_io(), err.is_syntax(), err.is_data(), err.is_eof()] == [
        False,
        True,
        False,
        False,
    ]


def test_custom_error_is_data():
    err = custom_error("something odd")
    assert err.is_data()
    assert err.line == 0
    assert str(err) == "something odd"


def test_io_error_keeps_original():
    original = OSError("disk")
    err = io_error(original)
    assert err.is_io()
    assert err.io is original
    assert (err.line, err.column) == (0, 0)
    assert str(err) == str(original)


def test_display_with_position():
    err = syntax_error(ErrorCode.TRAILING_CHARACTERS, 1, 5)
    assert str(err) == "trailing characters at line 1 column 5"


def test_display_without_position():
    err = syntax_error(ErrorCode.EXPECTED_COLON, 0, 0)
    assert str(err) == "expected `:`"


def test_repr_matches_debug_form():
    err = syntax_error(ErrorCode.KEY_MUST_BE_A_STRING, 1, 2)
    assert repr(err) == 'Error("key must be a string", line: 1, column: 2)'


def test_is_exception():
    err = syntax_error(ErrorCode.TRAILING_COMMA, 4, 9)
    assert err.code is ErrorCode.TRAILING_COMMA
    assert str(err) == "trailing comma at line 4 column 9"
    assert (err.line, err.column) == (4, 9)
    with pytest.raises(JsonError):
        raise err


def test_custom_error_reads_position_suffix():
    text = "bad thing at line 4 column 9"
    err = custom_error(text)
    assert (err.line, err.column) == (4, 9)
    assert err.message == "bad thing"
    assert str(err) == text


@pytest.mark.parametrize(
    "message, expected",
    [
        ("x at line 1 column 2", ("x", 1, 2)),
        ("no suffix here", None),
        ("x at line column 2", None),
        ("x at line 1 column", None),
        ("x at line 1 column 2 more", None),
        ("a at line 1 column 2 at line 3 column 4", ("a at line 1 column 2", 3, 4)),
    ],
)
def test_parse_line_col(message, expected):
    assert parse_line_col(message) == expected


def test_invalid_type_null():
    err = invalid_type(None, "a string")
    assert str(err) == "invalid type: null, expected a string"
    assert err.is_data()


def test_invalid_type_boolean():
    err = invalid_type(True, "a map")
    assert str(err) == "invalid type: boolean `true`, expected a map"


def test_invalid_type_rejects_unknown_value():
    with pytest.raises(TypeError):
        invalid_type(object(), "a map")


def test_fix_position_fills_unknown_position():
    err = custom_error("oops")
    fixed = err.fix_position(lambda: (5, 6))
    assert (fixed.line, fixed.column) == (5, 6)
    assert fixed.message == "oops"
    assert str(fixed) == "oops at line 5 column 6"


def test_fix_position_keeps_known_position():
    err = syntax_error(ErrorCode.INVALID_NUMBER, 2, 3)
    assert err.fix_position(lambda: (9, 9)) is err