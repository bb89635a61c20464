"""Reading JSON documents into Python values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any, Dict, List, Optional, Union

from .errors import ErrorCode, JsonError, invalid_type
from .numbers import Number, parse_integer
from .skipping import ignore_value as _skip_value
from .source import Reader

_QUOTE = ord('"')
_COMMA = ord(",")
_COLON = ord(":")
_MINUS = ord("-")
_ZERO = ord("0")
_NINE = ord("9")
_LBRACKET = ord("[")
_RBRACKET = ord("]")
_LBRACE = ord("{")
_RBRACE = ord("}")

_IDENTS = {
    ord("n"): (b"ull", None),
    ord("t"): (b"rue", True),
    ord("f"): (b"alse", False),
}

_RECURSION_LIMIT = 128

_OPENED = object()


def _is_digit(byte: Optional[int]) -> bool:
    return byte is not None and _ZERO <= byte <= _NINE


@dataclass
class _Frame:
    container: Union[List[Any], Dict[str, Any]]
    key: str = field(default="")

    def add(self, value: Any) -> None:
        if isinstance(self.container, list):
            self.container.append(value)
        else:
            self.container[self.key] = value


class Deserializer:
    """Reads JSON values one at a time from a :class:`Reader`.

    Arrays become lists, objects dicts, numbers ints or floats, and
    ``null`` becomes ``None``.  Nesting deeper than 127 levels is refused
    unless :meth:`disable_recursion_limit` has been called.
    """

    def __init__(self, reader: Reader) -> None:
        self._reader = reader
        self._remaining_depth = _RECURSION_LIMIT
        self._limit_recursion = True

    @classmethod
    def from_str(cls, text: str) -> "Deserializer":
        return cls(Reader.from_text(text))

    @classmethod
    def from_slice(cls, data: bytes) -> "Deserializer":
        return cls(Reader.from_bytes(data))

    @classmethod
    def from_reader(cls, stream: IO[Any]) -> "Deserializer":
        return cls(Reader.from_stream(stream))

    @property
    def reader(self) -> Reader:
        """The underlying byte reader."""
        return self._reader

    def disable_recursion_limit(self) -> None:
        """Accept arbitrarily deep nesting of arrays and objects."""
        self._limit_recursion = False

    def end(self) -> None:
        """Check that only whitespace remains in the input."""
        if self._reader.parse_whitespace() is not None:
            raise self._reader.peek_error(ErrorCode.TRAILING_CHARACTERS)

    def ignore_value(self) -> None:
        """Consume one value, checking its syntax, without building it."""
        _skip_value(self._reader)

    # -- any value ---------------------------------------------------------

    def parse_value(self) -> Any:
        """Read the next JSON value of any kind."""
        try:
            return self._parse_any()
        except JsonError as exc:
            raise exc.fix_position(self._reader.position) from None

    def _parse_any(self) -> Any:
        stack: List[_Frame] = []
        while True:
            value = self._open_or_scalar(stack)
            opened = value is _OPENED
            while stack:
                frame = stack[-1]
                if not opened:
                    frame.add(value)
                if self._has_next(frame, first=opened):
                    break
                stack.pop()
                self._leave()
                value = frame.container
                opened = False
            else:
                return value

    def _open_or_scalar(self, stack: List[_Frame]) -> Any:
        reader = self._reader
        peek = reader.parse_whitespace()
        if peek is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        if peek in _IDENTS:
            rest, value = _IDENTS[peek]
            reader.discard()
            reader.parse_ident(rest)
            return value
        if peek == _MINUS:
            reader.discard()
            return parse_integer(reader, False)
        if _is_digit(peek):
            return parse_integer(reader, True)
        if peek == _QUOTE:
            reader.discard()
            return reader.parse_str()
        if peek == _LBRACKET:
            self._enter()
            stack.append(_Frame([]))
            return _OPENED
        if peek == _LBRACE:
            self._enter()
            stack.append(_Frame({}))
            return _OPENED
        raise reader.peek_error(ErrorCode.EXPECTED_SOME_VALUE)

    def _enter(self) -> None:
        if self._limit_recursion:
            self._remaining_depth -= 1
            if self._remaining_depth == 0:
                raise self._reader.peek_error(ErrorCode.RECURSION_LIMIT_EXCEEDED)
        self._reader.discard()

    def _leave(self) -> None:
        if self._limit_recursion:
            self._remaining_depth += 1

    def _has_next(self, frame: _Frame, first: bool) -> bool:
        if isinstance(frame.container, list):
            return self._next_element(first)
        return self._next_key(frame, first)

    def _next_element(self, first: bool) -> bool:
        reader = self._reader
        byte = reader.parse_whitespace()
        if byte == _RBRACKET:
            reader.discard()
            return False
        if byte == _COMMA and not first:
            reader.discard()
            byte = reader.parse_whitespace()
            if byte == _RBRACKET:
                raise reader.peek_error(ErrorCode.TRAILING_COMMA)
            if byte is None:
                raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
            return True
        if byte is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_LIST)
        if first:
            return True
        raise reader.peek_error(ErrorCode.EXPECTED_LIST_COMMA_OR_END)

    def _next_key(self, frame: _Frame, first: bool) -> bool:
        reader = self._reader
        byte = reader.parse_whitespace()
        if byte == _RBRACE:
            reader.discard()
            return False
        if byte == _COMMA and not first:
            reader.discard()
            byte = reader.parse_whitespace()
        elif byte is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
        elif not first:
            raise reader.peek_error(ErrorCode.EXPECTED_OBJECT_COMMA_OR_END)

        if byte == _QUOTE:
            reader.discard()
            frame.key = reader.parse_str()
        elif byte == _RBRACE:
            raise reader.peek_error(ErrorCode.TRAILING_COMMA)
        elif byte is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        else:
            raise reader.peek_error(ErrorCode.KEY_MUST_BE_A_STRING)

        self._parse_object_colon()
        return True

    def _parse_object_colon(self) -> None:
        reader = self._reader
        byte = reader.parse_whitespace()
        if byte == _COLON:
            reader.discard()
        elif byte is None:
            raise reader.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
        else:
            raise reader.peek_error(ErrorCode.EXPECTED_COLON)

    # -- typed values ------------------------------------------------------

    def _peek_start(self) -> int:
        byte = self._reader.parse_whitespace()
        if byte is None:
            raise self._reader.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        return byte

    def _peek_invalid_type(self, expected: str) -> JsonError:
        """Describe the value ahead as an error for wanting ``expected``."""
        reader = self._reader
        peek = reader.peek()
        try:
            if peek in _IDENTS:
                rest, value = _IDENTS[peek]
                reader.discard()
                reader.parse_ident(rest)
                err = invalid_type(value, expected)
            elif peek == _MINUS:
                reader.discard()
                err = invalid_type(parse_integer(reader, False), expected)
            elif _is_digit(peek):
                err = invalid_type(parse_integer(reader, True), expected)
            elif peek == _QUOTE:
                reader.discard()
                err = invalid_type(reader.parse_str(), expected)
            elif peek == _LBRACKET:
                err = invalid_type([], expected)
            elif peek == _LBRACE:
                err = invalid_type({}, expected)
            else:
                err = reader.peek_error(ErrorCode.EXPECTED_SOME_VALUE)
        except JsonError as exc:
            return exc
        return err.fix_position(reader.position)

    def _positioned(self, exc: JsonError) -> JsonError:
        return exc.fix_position(self._reader.position)

    def parse_bool(self) -> bool:
        """Read ``true`` or ``false``."""
        try:
            peek = self._peek_start()
            if peek in (ord("t"), ord("f")):
                rest, value = _IDENTS[peek]
                self._reader.discard()
                self._reader.parse_ident(rest)
                return bool(value)
            raise self._peek_invalid_type("a boolean")
        except JsonError as exc:
            raise self._positioned(exc) from None

    def parse_number(self) -> Number:
        """Read a number."""
        try:
            peek = self._peek_start()
            if peek == _MINUS:
                self._reader.discard()
                return parse_integer(self._reader, False)
            if _is_digit(peek):
                return parse_integer(self._reader, True)
            raise self._peek_invalid_type("a number")
        except JsonError as exc:
            raise self._positioned(exc) from None

    def parse_str(self) -> str:
        """Read a string."""
        try:
            if self._peek_start() == _QUOTE:
                self._reader.discard()
                return self._reader.parse_str()
            raise self._peek_invalid_type("a string")
        except JsonError as exc:
            raise self._positioned(exc) from None

    def parse_null(self) -> None:
        """Read ``null``."""
        try:
            if self._peek_start() == ord("n"):
                self._reader.discard()
                self._reader.parse_ident(b"ull")
                return None
            raise self._peek_invalid_type("null")
        except JsonError as exc:
            raise self._positioned(exc) from None

    def parse_list(self) -> List[Any]:
        """Read an array."""
        try:
            if self._peek_start() == _LBRACKET:
                return self._parse_any()
            raise self._peek_invalid_type("a list")
        except JsonError as exc:
            raise self._positioned(exc) from None

    def parse_dict(self) -> Dict[str, Any]:
        """Read an object."""
        try:
            if self._peek_start() == _LBRACE:
                return self._parse_any()
            raise self._peek_invalid_type("a dict")
        except JsonError as exc:
            raise self._positioned(exc) from None