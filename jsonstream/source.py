"""Byte sources for the JSON reader, with line and column tracking."""

from __future__ import annotations

import string
from typing import IO, Any, Iterable, Iterator, NamedTuple, Optional

from .errors import ErrorCode, JsonError, io_error, syntax_error

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_WHITESPACE = frozenset(b" \n\t\r")
_HEX_DIGITS = frozenset(string.hexdigits.encode("ascii"))
_SIMPLE_ESCAPES = {
    ord('"'): b'"',
    ord("\\"): b"\\",
    ord("/"): b"/",
    ord("b"): b"\x08",
    ord("f"): b"\x0c",
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
}
_CHUNK_SIZE = 8192


class Position(NamedTuple):
    line: int
    column: int


class LineColIterator:
    """Iterate over bytes while counting lines and columns.

    Lines are one-based; the column is 0 right after a newline and counts
    the bytes read on the current line.
    """

    def __init__(self, iterable: Iterable[int]) -> None:
        self._iter = iter(iterable)
        self.line = 1
        self.col = 0
        self._start_of_line = 0

    def __iter__(self) -> "LineColIterator":
        return self

    def __next__(self) -> int:
        byte = next(self._iter)
        if byte == 0x0A:
            self._start_of_line += self.col + 1
            self.line += 1
            self.col = 0
        else:
            self.col += 1
        return byte

    def byte_offset(self) -> int:
        return self._start_of_line + self.col


def _bytes_of(chunks: Iterable[bytes]) -> Iterator[int]:
    for chunk in chunks:
        yield from chunk


def _read_chunks(stream: IO[Any]) -> Iterator[bytes]:
    read = getattr(stream, "read1", None) or stream.read
    while True:
        chunk = read(_CHUNK_SIZE)
        if not chunk:
            return
        yield chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)


class Reader:
    """A byte reader with one byte of look-ahead and JSON string scanning."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._iter = LineColIterator(_bytes_of(chunks))
        self._peeked: Optional[int] = None

    @classmethod
    def from_text(cls, text: str) -> "Reader":
        return cls([text.encode("utf-8")])

    @classmethod
    def from_bytes(cls, data: bytes) -> "Reader":
        return cls([bytes(data)])

    @classmethod
    def from_stream(cls, stream: IO[Any]) -> "Reader":
        """Read lazily from a binary or text stream."""
        return cls(_read_chunks(stream))

    def _fetch(self) -> Optional[int]:
        try:
            return next(self._iter)
        except StopIteration:
            return None
        except OSError as exc:
            raise io_error(exc) from exc

    def peek(self) -> Optional[int]:
        """The next byte without consuming it, or ``None`` at the end."""
        if self._peeked is None:
            self._peeked = self._fetch()
        return self._peeked

    def next(self) -> Optional[int]:
        """Consume and return the next byte, or ``None`` at the end."""
        if self._peeked is not None:
            byte, self._peeked = self._peeked, None
            return byte
        return self._fetch()

    def discard(self) -> None:
        """Drop the byte returned by the last :meth:`peek`."""
        self._peeked = None

    def position(self) -> Position:
        return Position(self._iter.line, self._iter.col)

    def peek_position(self) -> Position:
        return Position(self._iter.line, self._iter.col)

    def byte_offset(self) -> int:
        offset = self._iter.byte_offset()
        return offset - 1 if self._peeked is not None else offset

    def error(self, code: ErrorCode) -> JsonError:
        """Error caused by a byte from :meth:`next`."""
        line, column = self.position()
        return syntax_error(code, line, column)

    def peek_error(self, code: ErrorCode) -> JsonError:
        """Error caused by a byte from :meth:`peek`."""
        line, column = self.peek_position()
        return syntax_error(code, line, column)

    def parse_whitespace(self) -> Optional[int]:
        """Skip whitespace; return the next byte unconsumed, or ``None``."""
        while True:
            byte = self.peek()
            if byte is None or byte not in _WHITESPACE:
                return byte
            self.discard()

    def parse_ident(self, ident: bytes) -> None:
        """Consume exactly the bytes of ``ident``."""
        for expected in ident:
            byte = self.next()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
            if byte != expected:
                raise self.error(ErrorCode.EXPECTED_SOME_IDENT)

    def parse_str(self) -> str:
        """Read a string body after its opening quote, through the closing one."""
        buf = bytearray()
        while True:
            byte = self.next()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
            if byte == _QUOTE:
                try:
                    return buf.decode("utf-8")
                except UnicodeDecodeError:
                    raise self.error(ErrorCode.INVALID_UNICODE_CODE_POINT) from None
            if byte == _BACKSLASH:
                buf += self._parse_escape()
            elif byte < 0x20:
                raise self.error(ErrorCode.CONTROL_CHARACTER_WHILE_PARSING_STRING)
            else:
                buf.append(byte)

    def ignore_str(self) -> None:
        """Skip a string body after its opening quote, checking its escapes."""
        while True:
            byte = self.next()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
            if byte == _QUOTE:
                return
            if byte == _BACKSLASH:
                self._ignore_escape()
            elif byte < 0x20:
                raise self.error(ErrorCode.CONTROL_CHARACTER_WHILE_PARSING_STRING)

    def _escape_kind(self) -> int:
        byte = self.next()
        if byte is None:
            raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
        if byte not in _SIMPLE_ESCAPES and byte != ord("u"):
            raise self.error(ErrorCode.INVALID_ESCAPE)
        return byte

    def _ignore_escape(self) -> None:
        if self._escape_kind() == ord("u"):
            self._decode_hex_escape()

    def _parse_escape(self) -> bytes:
        kind = self._escape_kind()
        simple = _SIMPLE_ESCAPES.get(kind)
        if simple is not None:
            return simple
        first = self._decode_hex_escape()
        if 0xDC00 <= first <= 0xDFFF:
            raise self.error(ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE)
        if not 0xD800 <= first <= 0xDBFF:
            return chr(first).encode("utf-8")
        for expected in b"\\u":
            if self._peek_or_eof() != expected:
                raise self.error(ErrorCode.UNEXPECTED_END_OF_HEX_ESCAPE)
            self.discard()
        second = self._decode_hex_escape()
        if not 0xDC00 <= second <= 0xDFFF:
            raise self.error(ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE)
        code_point = (((first - 0xD800) << 10) | (second - 0xDC00)) + 0x10000
        return chr(code_point).encode("utf-8")

    def _peek_or_eof(self) -> int:
        byte = self.peek()
        if byte is None:
            raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
        return byte

    def _decode_hex_escape(self) -> int:
        value = 0
        for _ in range(4):
            byte = self.next()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
            if byte not in _HEX_DIGITS:
                raise self.error(ErrorCode.INVALID_ESCAPE)
            value = value * 16 + int(chr(byte), 16)
        return value