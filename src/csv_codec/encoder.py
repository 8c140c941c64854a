"""
CSV encoder: rows -> text.

Columns are resolved once per call (explicit key list, key -> header
mapping, or the keys of the first row), then every row is projected onto
them, rendered with format_value and quoted with escape_field.
"""

from typing import Any, List, Mapping, Sequence, Tuple

from .config import BOM, DEFAULT_DELIMITER, DEFAULT_NEWLINE, Columns, EncodeConfig
from .utils import escape_field, format_value


def resolve_columns(
    rows: Sequence[Mapping[str, Any]],
    columns: Columns = None,
) -> Tuple[List[str], List[str]]:
    """
    Resolve the projection for an encode call.

    Args:
        rows: Rows being encoded
        columns: Ordered key list (keys double as headers), ordered mapping
            of key -> header name, or None to use the first row's keys

    Returns:
        Tuple of (source keys, header names), in output order
    """
    if isinstance(columns, Mapping):
        keys = list(columns.keys())
        return keys, [columns[k] for k in keys]
    if columns is not None:
        keys = list(columns)
        return keys, list(keys)
    if rows:
        keys = list(rows[0].keys())
        return keys, list(keys)
    return [], []


class CSVEncoder:
    """
    Encoder for lists of row mappings.

    Example:
        >>> CSVEncoder().encode([{"a": "hello, world"}])
        'a\\n"hello, world"'
        >>> CSVEncoder(delimiter=";", columns={"id": "ID"}).encode([{"id": 7, "x": 1}])
        'ID\\n7'

    Args:
        header: Emit a header line (when there is at least one column)
        delimiter: Field delimiter
        columns: Projection, see resolve_columns
        newline: Line terminator placed between lines (never after the last)
        bom: Prefix the output with a byte-order mark
    """

    def __init__(
        self,
        header: bool = True,
        delimiter: str = DEFAULT_DELIMITER,
        columns: Columns = None,
        newline: str = DEFAULT_NEWLINE,
        bom: bool = False,
    ):
        # Validates delimiter, newline and columns
        EncodeConfig(header=header, delimiter=delimiter, columns=columns, newline=newline, bom=bom)
        self.header = header
        self.delimiter = delimiter
        self.columns = columns
        self.newline = newline
        self.bom = bom

    @classmethod
    def from_config(cls, config: EncodeConfig) -> "CSVEncoder":
        """Create an encoder from an EncodeConfig."""
        return cls(
            header=config.header,
            delimiter=config.delimiter,
            columns=config.columns,
            newline=config.newline,
            bom=config.bom,
        )

    def _join(self, values: List[str]) -> str:
        return self.delimiter.join(escape_field(v, self.delimiter) for v in values)

    def encode(self, rows: Sequence[Mapping[str, Any]]) -> str:
        """
        Encode rows as CSV text.

        Absent keys and None values become empty fields.

        Raises:
            UnsupportedValueType: If a projected value is not None, str,
                bool, int or float
        """
        keys, headers = resolve_columns(rows, self.columns)

        lines: List[str] = []
        if self.header and headers:
            lines.append(self._join(headers))

        for row in rows:
            lines.append(self._join([format_value(row.get(key), key) for key in keys]))

        text = self.newline.join(lines)
        return BOM + text if self.bom else text


def encode(
    rows: Sequence[Mapping[str, Any]],
    *,
    header: bool = True,
    delimiter: str = DEFAULT_DELIMITER,
    columns: Columns = None,
    newline: str = DEFAULT_NEWLINE,
    bom: bool = False,
) -> str:
    """Encode a list of row mappings as CSV text. See CSVEncoder."""
    encoder = CSVEncoder(
        header=header,
        delimiter=delimiter,
        columns=columns,
        newline=newline,
        bom=bom,
    )
    return encoder.encode(rows)
