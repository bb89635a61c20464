# jsonstream

A strict JSON parser that reports exactly where input goes wrong. It reads
from a `str`, a `bytes` object or a binary or text stream, and turns JSON into
plain Python values: objects become `dict`, arrays `list`, numbers `int` or
`float`, strings `str`, `true`/`false` `bool` and `null` `None`.

## Installation

    pip install jsonstream

## Parsing a document

`jsonstream.deserializer.Deserializer` reads values from its input:

```python
from jsonstream.deserializer import Deserializer

de = Deserializer.from_str('{"x": [1, 2.5, true, null]}')
de.parse_value()
# {'x': [1, 2.5, True, None]}
de.end()        # raises JsonError if anything but whitespace follows

Deserializer.from_slice(b'"hello"').parse_value()
# 'hello'

with open("data.json", "rb") as fh:
    de = Deserializer.from_reader(fh)
    document = de.parse_value()
    de.end()
```

`from_reader` reads the stream lazily in chunks; text streams are encoded as
UTF-8.

Besides `parse_value`, a deserializer offers typed readers that fail with a
data error when the next value is of another kind: `parse_bool`,
`parse_number`, `parse_str`, `parse_null`, `parse_list` and `parse_dict`.
`ignore_value` consumes one value and checks its syntax without building it.

```python
de = Deserializer.from_str("  [1, 2, 3]  ")
de.parse_list()      # [1, 2, 3]
de.end()

Deserializer.from_str('"a"').parse_number()
# JsonError: invalid type: string "a", expected a number at line 1 column 3
```

Nesting of arrays and objects is limited to 127 levels; deeper input raises
"recursion limit exceeded". Call `disable_recursion_limit()` to lift the
limit.

## Numbers

Numbers follow the strict JSON grammar: no leading zeros, at least one digit
after a decimal point and after an exponent marker. Integers from -2**63 to
2**64 - 1 stay `int`; larger ones, `-0` and anything with a fraction or
exponent become `float`. A value that would overflow to infinity is reported
as "number out of range".

`jsonstream.numbers.parse_number` parses a string that must hold exactly one
number:

```python
from jsonstream.numbers import parse_number

parse_number("-12")      # -12
parse_number("1.5e3")    # 1500.0
parse_number("01")       # JsonError: invalid number at line 1 column 2
```

## Errors

Every failure raises `jsonstream.errors.JsonError`. It carries the one-based
`line` and `column` at which the problem was found, its `code` (an
`ErrorCode`), and can be classified:

```python
from jsonstream.deserializer import Deserializer
from jsonstream.errors import Category, JsonError

try:
    Deserializer.from_str("{0}").parse_value()
except JsonError as err:
    print(err)                        # key must be a string at line 1 column 2
    print(err.classify() is Category.SYNTAX)
    print(err.is_eof())               # False
```

The categories are `IO`, `SYNTAX`, `DATA` and `EOF`, with the shortcuts
`is_io()`, `is_syntax()`, `is_data()` and `is_eof()`. An `EOF` error means the
input ended early, so a caller reading from a growing source can retry once
more data has arrived.

## Lower-level pieces

- `jsonstream.source.Reader` is the byte reader under the deserializer: one
  byte of look-ahead, line and column tracking, `byte_offset()`, and scanning
  of string bodies with escape handling (`parse_str`, `ignore_str`).
- `jsonstream.source.LineColIterator` wraps any iterable of bytes and counts
  lines and columns.
- `jsonstream.skipping.ignore_value` skips one value using an explicit stack,
  so its nesting depth is not limited.

## What this package does not do

- It has no one-call helper that parses a whole document and checks for
  trailing input; call `parse_value()` and then `end()` as shown above.
- It has no iterator over a sequence of concatenated values in one input.
  A `Deserializer` can be called repeatedly, but it does not check that
  numbers and literals are separated from what follows them.
- It only reads JSON; it does not write it.
- It has no command-line program.