"""Parsing of JSON numbers into Python ints and floats."""

from __future__ import annotations

from typing import Optional, Union

from .errors import ErrorCode, JsonError, syntax_error
from .source import Reader

Number = Union[int, float]

_U64_MAX = 2**64 - 1
_I32_MAX = 2**31 - 1
_I32_MIN = -(2**31)
_I64_MIN_MAGNITUDE = 2**63

_MINUS = ord("-")
_PLUS = ord("+")
_DOT = ord(".")
_ZERO = ord("0")
_NINE = ord("9")
_EXPONENT_MARKS = frozenset(b"eE")

_POW10 = tuple(float(f"1e{power}") for power in range(309))


def _is_digit(byte: Optional[int]) -> bool:
    return byte is not None and _ZERO <= byte <= _NINE


def _overflows(value: int, digit: int, limit: int) -> bool:
    """Whether ``value * 10 + digit`` would exceed ``limit``."""
    return value >= limit // 10 and (value > limit // 10 or digit > limit % 10)


def _peek_or_null(reader: Reader) -> int:
    byte = reader.peek()
    return 0 if byte is None else byte


def _next_or_null(reader: Reader) -> int:
    byte = reader.next()
    return 0 if byte is None else byte


def f64_from_parts(positive: bool, significand: int, exponent: int) -> float:
    """Combine ``significand * 10**exponent`` into a float with the given sign.

    Raises a :class:`JsonError` with an unknown position when the result
    does not fit in a float.
    """
    value = float(significand)
    while True:
        magnitude = abs(exponent)
        if magnitude < len(_POW10):
            power = _POW10[magnitude]
            if exponent >= 0:
                value *= power
                if value == float("inf"):
                    raise syntax_error(ErrorCode.NUMBER_OUT_OF_RANGE, 0, 0)
            else:
                value /= power
            break
        if value == 0.0:
            break
        if exponent >= 0:
            raise syntax_error(ErrorCode.NUMBER_OUT_OF_RANGE, 0, 0)
        value /= 1e308
        exponent += 308
    return value if positive else -value


def _from_parts(reader: Reader, positive: bool, significand: int, exponent: int) -> float:
    try:
        return f64_from_parts(positive, significand, exponent)
    except JsonError as exc:
        raise exc.fix_position(reader.position) from None


def parse_integer(reader: Reader, positive: bool) -> Number:
    """Parse a number whose sign has already been consumed.

    Integers that fit are returned as ``int`` (up to 2**64 - 1, or down to
    -2**63); everything else, including ``-0``, becomes a ``float``.
    """
    first = reader.next()
    if first is None:
        raise reader.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
    if first == _ZERO:
        if _is_digit(reader.peek()):
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
        return _parse_tail(reader, positive, 0)
    if not _is_digit(first):
        raise reader.error(ErrorCode.INVALID_NUMBER)

    significand = first - _ZERO
    while True:
        byte = _peek_or_null(reader)
        if not _is_digit(byte):
            return _parse_tail(reader, positive, significand)
        digit = byte - _ZERO
        if _overflows(significand, digit, _U64_MAX):
            return _parse_long_integer(reader, positive, significand)
        reader.discard()
        significand = significand * 10 + digit


def _parse_tail(reader: Reader, positive: bool, significand: int) -> Number:
    byte = _peek_or_null(reader)
    if byte == _DOT:
        return _parse_decimal(reader, positive, significand, 0)
    if byte in _EXPONENT_MARKS:
        return _parse_exponent(reader, positive, significand, 0)
    if positive:
        return significand
    if significand == 0 or significand > _I64_MIN_MAGNITUDE:
        return -float(significand)
    return -significand


def _parse_decimal(reader: Reader, positive: bool, significand: int, exponent_before: int) -> float:
    reader.discard()

    exponent_after = 0
    while _is_digit(_peek_or_null(reader)):
        digit = _peek_or_null(reader) - _ZERO
        if _overflows(significand, digit, _U64_MAX):
            return _parse_decimal_overflow(
                reader, positive, significand, exponent_before + exponent_after
            )
        reader.discard()
        significand = significand * 10 + digit
        exponent_after -= 1

    if exponent_after == 0:
        if reader.peek() is not None:
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
        raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

    exponent = exponent_before + exponent_after
    if _peek_or_null(reader) in _EXPONENT_MARKS:
        return _parse_exponent(reader, positive, significand, exponent)
    return _from_parts(reader, positive, significand, exponent)


def _parse_exponent(reader: Reader, positive: bool, significand: int, starting_exp: int) -> float:
    reader.discard()

    sign = _peek_or_null(reader)
    positive_exp = sign != _MINUS
    if sign in (_PLUS, _MINUS):
        reader.discard()

    first = reader.next()
    if first is None:
        raise reader.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
    if not _is_digit(first):
        raise reader.error(ErrorCode.INVALID_NUMBER)

    exp = first - _ZERO
    while _is_digit(_peek_or_null(reader)):
        digit = _peek_or_null(reader) - _ZERO
        reader.discard()
        if _overflows(exp, digit, _I32_MAX):
            return _parse_exponent_overflow(reader, positive, significand == 0, positive_exp)
        exp = exp * 10 + digit

    final_exp = starting_exp + exp if positive_exp else starting_exp - exp
    final_exp = max(_I32_MIN, min(_I32_MAX, final_exp))
    return _from_parts(reader, positive, significand, final_exp)


def _parse_long_integer(reader: Reader, positive: bool, significand: int) -> float:
    exponent = 0
    while True:
        byte = _peek_or_null(reader)
        if _is_digit(byte):
            reader.discard()
            exponent += 1
        elif byte == _DOT:
            return _parse_decimal(reader, positive, significand, exponent)
        elif byte in _EXPONENT_MARKS:
            return _parse_exponent(reader, positive, significand, exponent)
        else:
            return _from_parts(reader, positive, significand, exponent)


def _parse_decimal_overflow(reader: Reader, positive: bool, significand: int, exponent: int) -> float:
    # Further digits cannot change the significand; skip them.
    while _is_digit(_peek_or_null(reader)):
        reader.discard()
    if _peek_or_null(reader) in _EXPONENT_MARKS:
        return _parse_exponent(reader, positive, significand, exponent)
    return _from_parts(reader, positive, significand, exponent)


def _parse_exponent_overflow(
    reader: Reader, positive: bool, zero_significand: bool, positive_exp: bool
) -> float:
    if not zero_significand and positive_exp:
        raise reader.error(ErrorCode.NUMBER_OUT_OF_RANGE)
    while _is_digit(_peek_or_null(reader)):
        reader.discard()
    return 0.0 if positive else -0.0


def parse_signed_number(reader: Reader) -> Number:
    """Parse an optionally negative number that must make up all the input."""
    first = reader.peek()
    if first is None:
        raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

    value: Number = 0
    failure: Optional[JsonError] = None
    try:
        if first == _MINUS:
            reader.discard()
            value = parse_integer(reader, False)
        elif _is_digit(first):
            value = parse_integer(reader, True)
        else:
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    except JsonError as exc:
        failure = exc

    if reader.peek() is not None:
        raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    if failure is not None:
        raise failure.fix_position(reader.position)
    return value


def scan_integer128(reader: Reader) -> str:
    """Read the digits of an unsigned integer without a fraction or exponent."""
    first = _next_or_null(reader)
    if first == _ZERO:
        if _is_digit(_peek_or_null(reader)):
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
        return "0"
    if not _is_digit(first):
        raise reader.error(ErrorCode.INVALID_NUMBER)
    digits = bytearray([first])
    while _is_digit(_peek_or_null(reader)):
        digits.append(_peek_or_null(reader))
        reader.discard()
    return digits.decode("ascii")


def parse_number(text: str) -> Number:
    """Parse ``text`` as exactly one JSON number."""
    return parse_signed_number(Reader.from_text(text))