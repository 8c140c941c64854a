"""
Utility functions for CSV Codec.

Includes byte-order-mark handling, line-terminator canonicalization, field
escaping and the canonical text rendering of encoder values.
"""

import math
import re
from typing import Any, Optional

from .config import BOM, QUOTE
from .errors import UnsupportedValueType


_LINE_TERMINATOR_RE = re.compile(r'\r\n?')


def strip_bom(text: str) -> str:
    """Remove a single leading byte-order mark, if present."""
    if text.startswith(BOM):
        return text[1:]
    return text


def normalize_newlines(text: str) -> str:
    """
    Canonicalize line terminators to ``\\n``.
    
    Every ``\\r\\n`` pair and every lone ``\\r`` becomes ``\\n``, including
    terminators inside quoted regions, so a quoted line break always reaches
    the field value as a literal ``\\n``.
    """
    return _LINE_TERMINATOR_RE.sub('\n', text)


def escape_field(value: str, delimiter: str) -> str:
    """
    Quote a single output value for the given delimiter.
    
    The value is returned unchanged unless it contains the delimiter, a
    double quote or a line break. Otherwise it is wrapped in double quotes
    with every internal double quote doubled.
    
    Args:
        value: Text to write
        delimiter: Active field delimiter
        
    Returns:
        The value, quoted when needed
    """
    if (
        delimiter not in value
        and QUOTE not in value
        and '\n' not in value
        and '\r' not in value
    ):
        return value
    return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE


def unescape_field(text: str) -> str:
    """Inverse of escape_field for a single field's text."""
    if len(text) >= 2 and text[0] == QUOTE and text[-1] == QUOTE:
        return text[1:-1].replace(QUOTE * 2, QUOTE)
    return text


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_value(value: Any, key: Optional[str] = None) -> str:
    """
    Render an encoder value as text.
    
    Accepted kinds are None, str, bool, int and float. Anything else raises
    UnsupportedValueType.
    
    Args:
        value: Row value to render
        key: Column the value came from (used in the error message)
        
    Returns:
        Canonical text form of the value
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    raise UnsupportedValueType(key if key is not None else "?", value)
