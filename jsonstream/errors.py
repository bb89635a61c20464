"""Errors raised while reading JSON, with their categories and positions."""

from __future__ import annotations

import enum
import json
import re
from typing import Any, Callable, Optional, Tuple


class Category(enum.Enum):
    """Broad cause of a :class:`JsonError`."""

    IO = "io"
    SYNTAX = "syntax"
    DATA = "data"
    EOF = "eof"


class ErrorCode(enum.Enum):
    """The specific reason a JSON document could not be read."""

    MESSAGE = "message"
    IO = "io error"
    EOF_WHILE_PARSING_LIST = "EOF while parsing a list"
    EOF_WHILE_PARSING_OBJECT = "EOF while parsing an object"
    EOF_WHILE_PARSING_STRING = "EOF while parsing a string"
    EOF_WHILE_PARSING_VALUE = "EOF while parsing a value"
    EXPECTED_COLON = "expected `:`"
    EXPECTED_LIST_COMMA_OR_END = "expected `,` or `]`"
    EXPECTED_OBJECT_COMMA_OR_END = "expected `,` or `}`"
    EXPECTED_SOME_IDENT = "expected ident"
    EXPECTED_SOME_VALUE = "expected value"
    INVALID_ESCAPE = "invalid escape"
    INVALID_NUMBER = "invalid number"
    NUMBER_OUT_OF_RANGE = "number out of range"
    INVALID_UNICODE_CODE_POINT = "invalid unicode code point"
    CONTROL_CHARACTER_WHILE_PARSING_STRING = (
        "control character (\\u0000-\\u001F) found while parsing a string"
    )
    KEY_MUST_BE_A_STRING = "key must be a string"
    LONE_LEADING_SURROGATE_IN_HEX_ESCAPE = "lone leading surrogate in hex escape"
    TRAILING_COMMA = "trailing comma"
    TRAILING_CHARACTERS = "trailing characters"
    UNEXPECTED_END_OF_HEX_ESCAPE = "unexpected end of hex escape"
    RECURSION_LIMIT_EXCEEDED = "recursion limit exceeded"

    @property
    def category(self) -> Category:
        if self is ErrorCode.MESSAGE:
            return Category.DATA
        if self is ErrorCode.IO:
            return Category.IO
        if self in _EOF_CODES:
            return Category.EOF
        return Category.SYNTAX


_EOF_CODES = frozenset(
    {
        ErrorCode.EOF_WHILE_PARSING_LIST,
        ErrorCode.EOF_WHILE_PARSING_OBJECT,
        ErrorCode.EOF_WHILE_PARSING_STRING,
        ErrorCode.EOF_WHILE_PARSING_VALUE,
    }
)


class JsonError(Exception):
    """An error met while reading JSON.

    ``line`` and ``column`` are one-based; a line of 0 means the position
    is unknown.
    """

    def __init__(
        self,
        code: ErrorCode,
        line: int = 0,
        column: int = 0,
        *,
        message: Optional[str] = None,
        io: Optional[OSError] = None,
    ) -> None:
        self.code = code
        self.line = line
        self.column = column
        self.message = message
        self.io = io
        super().__init__(self._render())

    @property
    def description(self) -> str:
        """The error text without any position suffix."""
        if self.code is ErrorCode.MESSAGE:
            return self.message or ""
        if self.code is ErrorCode.IO:
            return str(self.io)
        return self.code.value

    def _render(self) -> str:
        if self.line == 0:
            return self.description
        return f"{self.description} at line {self.line} column {self.column}"

    def __str__(self) -> str:
        return self._render()

    def __repr__(self) -> str:
        quoted = json.dumps(self.description, ensure_ascii=False)
        return f"Error({quoted}, line: {self.line}, column: {self.column})"

    def classify(self) -> Category:
        return self.code.category

    def is_io(self) -> bool:
        return self.classify() is Category.IO

    def is_syntax(self) -> bool:
        return self.classify() is Category.SYNTAX

    def is_data(self) -> bool:
        return self.classify() is Category.DATA

    def is_eof(self) -> bool:
        return self.classify() is Category.EOF

    def fix_position(self, locate: Callable[[], Tuple[int, int]]) -> "JsonError":
        """Return this error placed at ``locate()`` if its position is unknown."""
        if self.line != 0:
            return self
        line, column = locate()
        return JsonError(self.code, line, column, message=self.message, io=self.io)


def syntax_error(code: ErrorCode, line: int, column: int) -> JsonError:
    return JsonError(code, line, column)


def io_error(error: OSError) -> JsonError:
    return JsonError(ErrorCode.IO, 0, 0, io=error)


def custom_error(message: Any) -> JsonError:
    """Build a data error, taking a trailing position suffix from the text."""
    text = str(message)
    parsed = parse_line_col(text)
    if parsed is None:
        return JsonError(ErrorCode.MESSAGE, 0, 0, message=text)
    stripped, line, column = parsed
    return JsonError(ErrorCode.MESSAGE, line, column, message=stripped)


def _describe_unexpected(value: Any) -> str:
    if isinstance(value, bool):
        return f"boolean `{'true' if value else 'false'}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{value!r}`"
    if isinstance(value, str):
        return f"string {json.dumps(value, ensure_ascii=False)}"
    if isinstance(value, (list, tuple)):
        return "sequence"
    if isinstance(value, dict):
        return "map"
    raise TypeError(f"cannot describe value of type {type(value).__name__}")


def invalid_type(unexpected: Any, expected: str) -> JsonError:
    """Data error for a JSON value of the wrong kind; ``None`` stands for null."""
    found = "null" if unexpected is None else _describe_unexpected(unexpected)
    return custom_error(f"invalid type: {found}, expected {expected}")


_SUFFIX = re.compile(r" at line ([0-9]*) column ([0-9]*)")


def parse_line_col(message: str) -> Optional[Tuple[str, int, int]]:
    """Split ``"... at line L column C"`` into the text before it, L and C."""
    start = message.rfind(" at line ")
    if start < 0:
        return None
    match = _SUFFIX.fullmatch(message, start)
    if match is None or not match.group(1) or not match.group(2):
        return None
    return message[:start], int(match.group(1)), int(match.group(2))