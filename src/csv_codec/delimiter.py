"""
CSV delimiter auto-detection by cross-line consistency.

Sampling several lines and rewarding a delimiter that appears the same
number of times on each of them keeps detection stable when the header row
has an unusually low field count (including a single-field header).
"""

import logging
from typing import List, Sequence

from .config import CANDIDATE_DELIMITERS, DEFAULT_DELIMITER
from .tokenizer import count_outside_quotes


# Weight of one consistent line relative to one line that merely contains
# the candidate
CONSISTENCY_WEIGHT: int = 1000


def score_delimiter(lines: Sequence[str], delimiter: str) -> int:
    """
    Score one candidate delimiter over the sample lines.

    The typical count is the value at the midpoint of the sorted non-zero
    per-line counts. The score is the number of lines whose count equals
    the typical count times CONSISTENCY_WEIGHT, plus the number of lines
    where the candidate appears at all.

    Args:
        lines: Sample logical lines
        delimiter: Candidate delimiter

    Returns:
        Score, or -1 when the candidate appears on no line
    """
    counts = [count_outside_quotes(line, delimiter) for line in lines]
    non_zero: List[int] = sorted(c for c in counts if c > 0)
    if not non_zero:
        return -1

    typical = non_zero[len(non_zero) // 2]
    consistent = sum(1 for c in counts if c == typical)
    return consistent * CONSISTENCY_WEIGHT + len(non_zero)


def detect_delimiter(lines: Sequence[str]) -> str:
    """
    Pick the most plausible delimiter for the sample lines.

    Candidates are tried in priority order ``, ; \\t |``; only a strictly
    higher score replaces the current best, so ties keep the earlier
    candidate. Falls back to a comma when no candidate appears at all.

    Args:
        lines: Leading logical lines of the document (callers pass up to 10)

    Returns:
        The detected delimiter character
    """
    best_delimiter = DEFAULT_DELIMITER
    best_score = -1

    for delimiter in CANDIDATE_DELIMITERS:
        score = score_delimiter(lines, delimiter)
        if score > best_score:
            best_score = score
            best_delimiter = delimiter

    logging.debug(
        f"Detected delimiter {best_delimiter!r} "
        f"(score {best_score}) over {len(lines)} sample line(s)"
    )
    return best_delimiter
