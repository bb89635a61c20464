"""Skipping over JSON values without building them."""

from __future__ import annotations

from typing import List, Optional

from .errors import ErrorCode
from .source import Reader

_QUOTE = ord('"')
_COMMA = ord(",")
_COLON = ord(":")
_MINUS = ord("-")
_PLUS = ord("+")
_DOT = ord(".")
_ZERO = ord("0")
_NINE = ord("9")
_LBRACKET = ord("[")
_RBRACKET = ord("]")
_LBRACE = ord("{")
_RBRACE = ord("}")
_EXPONENT_MARKS = frozenset(b"eE")

_IDENTS = {
    ord("n"): b"ull",
    ord("t"): b"rue",
    ord("f"): b"alse",
}


def _is_digit(byte: Optional[int]) -> bool:
    return byte is not None and _ZERO <= byte <= _NINE


def _peek_or_null(reader: Reader) -> int:
    byte = reader.peek()
    return 0 if byte is None else byte


def _next_or_null(reader: Reader) -> int:
    byte = reader.next()
    return 0 if byte is None else byte


def _skip_digits(reader: Reader) -> bool:
    """Consume a run of digits; return whether there was at least one."""
    seen = False
    while _is_digit(reader.peek()):
        reader.discard()
        seen = True
    return seen


def ignore_value(reader: Reader) -> None:
    """Consume one complete JSON value, checking its syntax.

    Nesting is tracked on an explicit stack, so depth is not limited.
    """
    stack: List[int] = []
    enclosing: Optional[int] = None

    while True:
        peek = reader.parse_whitespace()
        if peek is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

        opened: Optional[int] = None
        if peek in _IDENTS:
            reader.discard()
            reader.parse_ident(_IDENTS[peek])
        elif peek == _MINUS:
            reader.discard()
            ignore_integer(reader)
        elif _is_digit(peek):
            ignore_integer(reader)
        elif peek == _QUOTE:
            reader.discard()
            reader.ignore_str()
        elif peek in (_LBRACKET, _LBRACE):
            if enclosing is not None:
                stack.append(enclosing)
                enclosing = None
            reader.discard()
            opened = peek
        else:
            raise reader.peek_error(ErrorCode.EXPECTED_SOME_VALUE)

        if opened is not None:
            accept_comma, frame = False, opened
        elif enclosing is not None:
            accept_comma, frame = True, enclosing
            enclosing = None
        elif stack:
            accept_comma, frame = True, stack.pop()
        else:
            return

        while True:
            byte = reader.parse_whitespace()
            if byte is None:
                raise reader.peek_error(
                    ErrorCode.EOF_WHILE_PARSING_LIST
                    if frame == _LBRACKET
                    else ErrorCode.EOF_WHILE_PARSING_OBJECT
                )
            if byte == _COMMA and accept_comma:
                reader.discard()
                break
            closes = (byte == _RBRACKET and frame == _LBRACKET) or (
                byte == _RBRACE and frame == _LBRACE
            )
            if not closes:
                if accept_comma:
                    raise reader.peek_error(
                        ErrorCode.EXPECTED_LIST_COMMA_OR_END
                        if frame == _LBRACKET
                        else ErrorCode.EXPECTED_OBJECT_COMMA_OR_END
                    )
                break
            reader.discard()
            if not stack:
                return
            frame = stack.pop()
            accept_comma = True

        if frame == _LBRACE:
            _ignore_key(reader)

        enclosing = frame


def _ignore_key(reader: Reader) -> None:
    byte = reader.parse_whitespace()
    if byte is None:
        raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
    if byte != _QUOTE:
        raise reader.peek_error(ErrorCode.KEY_MUST_BE_A_STRING)
    reader.discard()
    reader.ignore_str()
    byte = reader.parse_whitespace()
    if byte is None:
        raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
    if byte != _COLON:
        raise reader.peek_error(ErrorCode.EXPECTED_COLON)
    reader.discard()


def ignore_integer(reader: Reader) -> None:
    """Consume a number whose sign, if any, has already been consumed."""
    first = _next_or_null(reader)
    if first == _ZERO:
        if _is_digit(reader.peek()):
            raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    elif _is_digit(first):
        _skip_digits(reader)
    else:
        raise reader.error(ErrorCode.INVALID_NUMBER)

    byte = _peek_or_null(reader)
    if byte == _DOT:
        ignore_decimal(reader)
    elif byte in _EXPONENT_MARKS:
        ignore_exponent(reader)


def ignore_decimal(reader: Reader) -> None:
    """Consume a peeked ``.`` and the fraction, and any exponent after it."""
    reader.discard()
    if not _skip_digits(reader):
        raise reader.peek_error(ErrorCode.INVALID_NUMBER)
    if _peek_or_null(reader) in _EXPONENT_MARKS:
        ignore_exponent(reader)


def ignore_exponent(reader: Reader) -> None:
    """Consume a peeked ``e`` or ``E``, an optional sign and the digits."""
    reader.discard()
    if _peek_or_null(reader) in (_PLUS, _MINUS):
        reader.discard()
    if not _is_digit(_next_or_null(reader)):
        raise reader.error(ErrorCode.INVALID_NUMBER)
    _skip_digits(reader)