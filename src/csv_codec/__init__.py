"""CSV Codec - Quote-aware CSV decoding and encoding with delimiter detection."""

from .decoder import CSVDecoder, decode, decode_rows
from .delimiter import detect_delimiter
from .encoder import CSVEncoder, encode
from .errors import (
    ColumnCountMismatch,
    CSVCodecError,
    InvalidInputType,
    UnclosedQuote,
    UnsupportedValueType,
)
from .tokenizer import count_outside_quotes, split_fields, split_lines
from .utils import escape_field, format_value, normalize_newlines, strip_bom, unescape_field

__all__ = [
    "CSVDecoder",
    "CSVEncoder",
    "decode",
    "decode_rows",
    "encode",
    "detect_delimiter",
    "split_lines",
    "split_fields",
    "count_outside_quotes",
    "escape_field",
    "unescape_field",
    "format_value",
    "normalize_newlines",
    "strip_bom",
    "CSVCodecError",
    "InvalidInputType",
    "UnclosedQuote",
    "ColumnCountMismatch",
    "UnsupportedValueType",
]
