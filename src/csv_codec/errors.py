"""
Exception types raised by CSV Codec.

Decode failures carry the 1-based row number of the offending logical line
(the header line is row 1) so callers can point users at the bad input.
"""

from typing import Any


class CSVCodecError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInputType(CSVCodecError, TypeError):
    """Raised when decode input is not a text value."""

    def __init__(self, value: Any = None):
        self.value_type = type(value).__name__
        super().__init__("input must be a string")


class UnclosedQuote(CSVCodecError, ValueError):
    """Raised in strict mode when a quoted field is never closed."""

    def __init__(self, row: int):
        self.row = row
        super().__init__(f"unclosed quote at row {row}")


class ColumnCountMismatch(CSVCodecError, ValueError):
    """Raised in strict mode when a row's field count differs from the header's."""

    def __init__(self, row: int, actual: int, expected: int):
        self.row = row
        self.actual = actual
        self.expected = expected
        super().__init__(f"row {row} has {actual} fields, expected {expected}")


class UnsupportedValueType(CSVCodecError, TypeError):
    """Raised when a row value has no canonical text rendering."""

    def __init__(self, key: str, value: Any):
        self.key = key
        self.value_type = type(value).__name__
        super().__init__(
            f"column {key!r} has unsupported value type {self.value_type}"
        )
