"""
Quote-aware tokenizer for CSV text.

This module provides the scanning primitives shared by the decoder:
- QuoteScanner: two-state (unquoted / quoted) automaton over a string
- split_lines: document -> logical lines, keeping quoted line breaks
- split_fields: logical line -> field values, resolving quoting
- count_outside_quotes: delimiter occurrences outside quoted regions

Line splitting and delimiter counting only need to know whether a position is
inside a quoted region, so every double quote toggles the state. Field
splitting is stricter: a quote opens a quoted region only at the start of a
field, and a doubled quote inside a quoted region is an escaped literal quote.
"""

import enum
from typing import Iterator, List, Optional, Tuple

from .config import QUOTE


class ScanState(enum.Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


class QuoteScanner:
    """
    Walk a string while tracking whether each position is inside quotes.

    Example:
        >>> [(c, s.value) for c, s in QuoteScanner('a"b"c')]
        [('a', 'unquoted'), ('"', 'quoted'), ('b', 'quoted'), ('"', 'unquoted'), ('c', 'unquoted')]

    Each character is yielded with the state in effect after it was read, so
    a quote character reports the state it switched to.
    """

    def __init__(self, text: str):
        self.text = text
        self.state = ScanState.UNQUOTED

    @property
    def quoted(self) -> bool:
        return self.state is ScanState.QUOTED

    def feed(self, char: str) -> ScanState:
        """Advance the automaton by one character and return the new state."""
        if char == QUOTE:
            self.state = ScanState.UNQUOTED if self.quoted else ScanState.QUOTED
        return self.state

    def __iter__(self) -> Iterator[Tuple[str, ScanState]]:
        for char in self.text:
            yield char, self.feed(char)


def split_lines(document: str) -> List[str]:
    """
    Split a document into logical lines.

    A line terminator (``\\n``, ``\\r`` or a ``\\r\\n`` pair) ends the current
    line only when it is outside quotes; inside quotes it is kept as content.
    Interior empty lines are preserved, but no line is emitted for the empty
    remainder after a terminal line break.

    Args:
        document: Whole CSV text

    Returns:
        Logical lines, in document order
    """
    lines: List[str] = []
    current: List[str] = []
    scanner = QuoteScanner(document)
    length = len(document)
    i = 0

    while i < length:
        char = document[i]
        scanner.feed(char)
        if not scanner.quoted and (char == '\r' or char == '\n'):
            if char == '\r' and i + 1 < length and document[i + 1] == '\n':
                i += 1
            lines.append(''.join(current))
            current = []
        else:
            current.append(char)
        i += 1

    if current:
        lines.append(''.join(current))

    return lines


def split_fields(line: str, delimiter: str, relaxed: bool = False) -> Optional[List[str]]:
    """
    Split one logical line into field values.

    Quoting must start at the beginning of a field; a quote after other
    characters is literal text. Inside quotes, ``""`` is an escaped quote and
    a single ``"`` closes the quoted region.

    Args:
        line: Logical line (may contain quoted line breaks)
        delimiter: Field delimiter character
        relaxed: Accept a quote left open at end of line

    Returns:
        List of field values, or None when a quote was never closed and
        relaxed is False
    """
    fields: List[str] = []
    current: List[str] = []
    state = ScanState.UNQUOTED
    length = len(line)
    i = 0

    while i < length:
        char = line[i]

        if state is ScanState.UNQUOTED:
            if char == delimiter:
                fields.append(''.join(current))
                current = []
            elif char == QUOTE and not current:
                state = ScanState.QUOTED
            else:
                current.append(char)
            i += 1
            continue

        if char == QUOTE:
            if i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            state = ScanState.UNQUOTED
        else:
            current.append(char)
        i += 1

    if state is ScanState.QUOTED and not relaxed:
        return None

    fields.append(''.join(current))
    return fields


def count_outside_quotes(line: str, delimiter: str) -> int:
    """Count occurrences of delimiter in line that are not inside quotes."""
    return sum(
        1 for char, state in QuoteScanner(line)
        if char == delimiter and state is ScanState.UNQUOTED
    )
