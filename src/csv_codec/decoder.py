"""
CSV decoder: text -> rows.

This module provides a decoder that:
- Strips a leading UTF byte-order mark
- Canonicalizes line terminators before splitting
- Keeps line breaks and delimiters that sit inside quoted fields
- Auto-detects the delimiter from the first lines (comma, semicolon, tab, pipe)
- Fails fast on malformed input in strict mode, or reconciles it in relaxed mode
"""

import logging
from typing import Callable, Dict, List, Optional

from .config import (
    AUTO_DELIMITER,
    DETECTION_SAMPLE_SIZE,
    SYNTHETIC_COLUMN_PREFIX,
    DecodeConfig,
)
from .delimiter import detect_delimiter
from .errors import ColumnCountMismatch, InvalidInputType, UnclosedQuote
from .tokenizer import split_fields, split_lines
from .utils import normalize_newlines, strip_bom


HeaderTransform = Callable[[str, int], str]


class CSVDecoder:
    """
    Decoder for in-memory CSV text.

    Features:
        - Headered decoding into dicts keyed by header name
        - Headerless decoding into positional lists
        - Delimiter auto-detection over the first 10 logical lines
        - Strict mode: errors carry the 1-based row number
        - Relaxed mode: pads short rows, keys extra fields as _col<index>

    Example:
        >>> decoder = CSVDecoder()
        >>> decoder.decode_records("nome,valor\\nAlice,10")
        [{'nome': 'Alice', 'valor': '10'}]
        >>> decoder.decode_rows("a;b\\n1;2")
        [['a', 'b'], ['1', '2']]

    Args:
        delimiter: Field delimiter, or "auto" to detect it
        skip_empty_lines: Drop empty logical lines before decoding
        trim: Strip surrounding whitespace from header names and values
        transform_header: Optional callback (name, index) -> name for header names
        relaxed: Tolerate unclosed quotes and column count mismatches
    """

    def __init__(
        self,
        delimiter: str = AUTO_DELIMITER,
        skip_empty_lines: bool = True,
        trim: bool = True,
        transform_header: Optional[HeaderTransform] = None,
        relaxed: bool = False,
    ):
        # Validates the delimiter
        DecodeConfig(delimiter=delimiter)
        self.delimiter = delimiter
        self.skip_empty_lines = skip_empty_lines
        self.trim = trim
        self.transform_header = transform_header
        self.relaxed = relaxed

    @classmethod
    def from_config(
        cls,
        config: DecodeConfig,
        transform_header: Optional[HeaderTransform] = None,
    ) -> "CSVDecoder":
        """Create a decoder from a DecodeConfig."""
        return cls(
            delimiter=config.delimiter,
            skip_empty_lines=config.skip_empty_lines,
            trim=config.trim,
            transform_header=transform_header,
            relaxed=config.relaxed,
        )

    def _prepare(self, text: str) -> List[str]:
        """Validate, clean and split the document into logical lines."""
        if not isinstance(text, str):
            raise InvalidInputType(text)

        lines = split_lines(normalize_newlines(strip_bom(text)))
        if self.skip_empty_lines:
            lines = [line for line in lines if line]
        return lines

    def _resolve_delimiter(self, lines: List[str]) -> str:
        if self.delimiter == AUTO_DELIMITER:
            return detect_delimiter(lines[:DETECTION_SAMPLE_SIZE])
        return self.delimiter

    def _split(self, line: str, delimiter: str, row: int) -> List[str]:
        """Split one line, applying the unclosed-quote policy."""
        fields = split_fields(line, delimiter)
        if fields is not None:
            return fields
        if not self.relaxed:
            raise UnclosedQuote(row)
        logging.debug(f"Row {row}: unclosed quote, keeping remainder as-is")
        return split_fields(line, delimiter, relaxed=True)

    def _clean(self, value: str) -> str:
        return value.strip() if self.trim else value

    def _read_headers(self, line: str, delimiter: str) -> List[str]:
        headers = []
        for index, name in enumerate(self._split(line, delimiter, 1)):
            name = self._clean(name)
            if self.transform_header is not None:
                name = self.transform_header(name, index)
            headers.append(name)
        return headers

    def decode_records(self, text: str) -> List[Dict[str, str]]:
        """
        Decode CSV text whose first line is a header.

        Args:
            text: Whole CSV document

        Returns:
            One dict per data row, keyed by header name in header order.
            Duplicate header names keep the position of their first
            occurrence and the value of their last.

        Raises:
            InvalidInputType: If text is not a str
            UnclosedQuote: Strict mode, a quote was never closed
            ColumnCountMismatch: Strict mode, a row's field count differs
                from the header's
        """
        lines = self._prepare(text)
        if not lines:
            return []

        delimiter = self._resolve_delimiter(lines)
        headers = self._read_headers(lines[0], delimiter)
        expected = len(headers)

        records: List[Dict[str, str]] = []
        for row, line in enumerate(lines[1:], start=2):
            fields = self._split(line, delimiter, row)
            actual = len(fields)

            if actual != expected:
                if not self.relaxed:
                    raise ColumnCountMismatch(row, actual, expected)
                logging.debug(
                    f"Row {row}: {actual} field(s), header has {expected}; "
                    f"{'padding' if actual < expected else 'keeping extras'}"
                )

            record: Dict[str, str] = {}
            for index, name in enumerate(headers):
                record[name] = self._clean(fields[index]) if index < actual else ""
            for index in range(expected, actual):
                record[f"{SYNTHETIC_COLUMN_PREFIX}{index}"] = self._clean(fields[index])
            records.append(record)

        return records

    def decode_rows(self, text: str) -> List[List[str]]:
        """
        Decode CSV text without a header line.

        Args:
            text: Whole CSV document

        Returns:
            One list of field values per logical line, no column count
            reconciliation

        Raises:
            InvalidInputType: If text is not a str
            UnclosedQuote: Strict mode, a quote was never closed
        """
        lines = self._prepare(text)
        if not lines:
            return []

        delimiter = self._resolve_delimiter(lines)
        return [
            [self._clean(value) for value in self._split(line, delimiter, row)]
            for row, line in enumerate(lines, start=1)
        ]


def decode(
    text: str,
    *,
    delimiter: str = AUTO_DELIMITER,
    skip_empty_lines: bool = True,
    trim: bool = True,
    transform_header: Optional[HeaderTransform] = None,
    relaxed: bool = False,
) -> List[Dict[str, str]]:
    """Decode headered CSV text into a list of dicts. See CSVDecoder."""
    decoder = CSVDecoder(
        delimiter=delimiter,
        skip_empty_lines=skip_empty_lines,
        trim=trim,
        transform_header=transform_header,
        relaxed=relaxed,
    )
    return decoder.decode_records(text)


def decode_rows(
    text: str,
    *,
    delimiter: str = AUTO_DELIMITER,
    skip_empty_lines: bool = True,
    trim: bool = True,
    relaxed: bool = False,
) -> List[List[str]]:
    """Decode headerless CSV text into a list of field lists. See CSVDecoder."""
    decoder = CSVDecoder(
        delimiter=delimiter,
        skip_empty_lines=skip_empty_lines,
        trim=trim,
        relaxed=relaxed,
    )
    return decoder.decode_rows(text)
