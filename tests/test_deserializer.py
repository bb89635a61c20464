import io
import math

import pytest

from jsonstream.deserializer import Deserializer
from jsonstream.errors import Category, ErrorCode, JsonError


def parse(text):
    return Deserializer.from_str(text).parse_value()


def error_of(text):
    with pytest.raises(JsonError) as info:
        parse(text)
    return info.value


def _nested_empty_lists(levels):
    expected = []
    for _ in range(levels):
        expected = [expected]
    return expected


def test_error_repr_for_non_string_key():
    err = error_of("{0}")
    assert repr(err) == 'Error("key must be a string", line: 1, column: 2)'


@pytest.mark.parametrize(
    "text, expected",
    [
        ("null", None),
        ("true", True),
        ("false", False),
        (" 12 ", 12),
        ("-3", -3),
        ("1.5", 1.5),
        ('"a\\nb"', "a\nb"),
        ("18446744073709551615", 18446744073709551615),
        ("[]", []),
        ("{}", {}),
    ],
)
def test_scalars_and_empty_containers(text, expected):
    assert parse(text) == expected


def test_negative_zero_is_float():
    value = parse("-0")
    assert value == 0.0 and math.copysign(1.0, value) == -1.0


def test_large_integer_becomes_float():
    assert parse("18446744073709551616") == 1.8446744073709552e19


def test_nested_structure():
    text = '{"a": [1, {"b": null}, "c"], "d": {"e": [true, false]}}'
    assert parse(text) == {"a": [1, {"b": None}, "c"], "d": {"e": [True, False]}}


def test_duplicate_keys_keep_last():
    assert parse('{"k": 1, "k": 2}') == {"k": 2}


@pytest.mark.parametrize(
    "text, message",
    [
        ("[1,]", "trailing comma at line 1 column 4"),
        ('{"a":1,}', "trailing comma at line 1 column 8"),
        ('{"a" 1}', "expected `:` at line 1 column 6"),
        ("[1 2]", "expected `,` or `]` at line 1 column 4"),
        ('{"a":1 "b":2}', "expected `,` or `}` at line 1 column 8"),
        ("01", "invalid number at line 1 column 2"),
        ("x", "expected value at line 1 column 1"),
    ],
)
def test_syntax_errors(text, message):
    err = error_of(text)
    assert str(err) == message
    assert err.is_syntax()


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "EOF while parsing a value at line 1 column 0"),
        ("[1", "EOF while parsing a list at line 1 column 2"),
        ("[1,", "EOF while parsing a value at line 1 column 3"),
        ('{"a":1', "EOF while parsing an object at line 1 column 6"),
        ("{", "EOF while parsing an object at line 1 column 1"),
    ],
)
def test_eof_errors(text, message):
    err = error_of(text)
    assert str(err) == message
    assert err.classify() is Category.EOF


def test_recursion_limit_allows_127_levels():
    depth = 127
    value = parse("[" * depth + "]" * depth)
    assert value == _nested_empty_lists(depth - 1)


def test_recursion_limit_exceeded():
    err = error_of("[" * 128 + "]" * 128)
    assert err.code is ErrorCode.RECURSION_LIMIT_EXCEEDED
    assert str(err) == "recursion limit exceeded at line 1 column 128"


def test_recursion_limit_counts_objects():
    text = '{"a":' * 128 + "1" + "}" * 128
    err = error_of(text)
    assert err.code is ErrorCode.RECURSION_LIMIT_EXCEEDED


def test_disable_recursion_limit():
    depth = 10000
    de = Deserializer.from_str("[" * depth + "]" * depth)
    de.disable_recursion_limit()
    value = de.parse_value()
    assert len(value) == 1
    inner = value
    for _ in range(depth - 1):
        assert len(inner) == 1
        inner = inner[0]
    assert inner == []


def test_end_rejects_trailing_characters():
    de = Deserializer.from_str("1 2")
    assert de.parse_value() == 1
    with pytest.raises(JsonError) as info:
        de.end()
    assert str(info.value) == "trailing characters at line 1 column 3"


def test_end_accepts_trailing_whitespace():
    de = Deserializer.from_str("[1] \n\t")
    assert de.parse_value() == [1]
    assert de.end() is None


def test_ignore_value_then_parse_next():
    de = Deserializer.from_str('[1, {"a": "b"}] 7')
    de.ignore_value()
    assert de.parse_value() == 7


def test_from_slice():
    assert Deserializer.from_slice(b'{"a": [true]}').parse_value() == {"a": [True]}


def test_from_reader_bytes():
    de = Deserializer.from_reader(io.BytesIO(b'["x", 2.5]'))
    assert de.parse_value() == ["x", 2.5]


def test_from_reader_text():
    de = Deserializer.from_reader(io.StringIO('{"\u00e9": 1}'))
    assert de.parse_value() == {"\u00e9": 1}


def test_parse_bool():
    assert Deserializer.from_str(" true").parse_bool() is True
    assert Deserializer.from_str("false").parse_bool() is False


def test_parse_bool_wrong_type():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("1").parse_bool()
    err = info.value
    assert str(err) == "invalid type: integer `1`, expected a boolean at line 1 column 1"
    assert err.is_data()


def test_parse_bool_not_a_value():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("x").parse_bool()
    assert str(info.value) == "expected value at line 1 column 1"


def test_parse_bool_truncated():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("tru").parse_bool()
    assert info.value.is_eof()


def test_parse_number():
    assert Deserializer.from_str("1.5e3").parse_number() == 1500.0
    assert Deserializer.from_str("-42").parse_number() == -42


def test_parse_number_wrong_type():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str('"x"').parse_number()
    assert str(info.value) == 'invalid type: string "x", expected a number at line 1 column 3'


def test_parse_number_from_bool_reports_position():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("true").parse_number()
    assert str(info.value) == (
        "invalid type: boolean `true`, expected a number at line 1 column 4"
    )


def test_parse_number_lone_minus():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("-").parse_number()
    assert info.value.is_eof()


def test_parse_str():
    assert Deserializer.from_str('"h\\u00e9"').parse_str() == "h\u00e9"


def test_parse_str_wrong_type():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("[1]").parse_str()
    assert str(info.value) == "invalid type: sequence, expected a string at line 1 column 1"


def test_parse_null():
    de = Deserializer.from_str("null 5")
    assert de.parse_null() is None
    assert de.parse_value() == 5


def test_parse_null_wrong_type():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("false").parse_null()
    assert str(info.value) == "invalid type: boolean `false`, expected null at line 1 column 5"


def test_parse_list():
    assert Deserializer.from_str("[1, [2], {}]").parse_list() == [1, [2], {}]


def test_parse_list_wrong_type():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("{}").parse_list()
    assert str(info.value) == "invalid type: map, expected a list at line 1 column 1"


def test_parse_dict():
    text = '{"k": [1, {"z": null}]}'
    assert Deserializer.from_str(text).parse_dict() == {"k": [1, {"z": None}]}


def test_parse_dict_wrong_type():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("null").parse_dict()
    assert str(info.value) == "invalid type: null, expected a dict at line 1 column 4"


def test_parse_empty_input_typed():
    with pytest.raises(JsonError) as info:
        Deserializer.from_str("   ").parse_str()
    assert info.value.code is ErrorCode.EOF_WHILE_PARSING_VALUE