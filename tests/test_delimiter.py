"""Tests for delimiter auto-detection."""

import logging

import pytest

from csv_codec.delimiter import CONSISTENCY_WEIGHT, detect_delimiter, score_delimiter


class TestDetectDelimiter:
    """Tests for detect_delimiter."""

    @pytest.mark.parametrize("delimiter", [",", ";", "\t", "|"])
    def test_detects_each_candidate(self, delimiter):
        lines = [delimiter.join("abc"), delimiter.join("123")]
        assert detect_delimiter(lines) == delimiter

    def test_defaults_to_comma_when_nothing_found(self):
        assert detect_delimiter(["abc"]) == ","

    def test_defaults_to_comma_on_empty_sample(self):
        assert detect_delimiter([]) == ","

    def test_ignores_delimiters_inside_quotes(self):
        assert detect_delimiter(['"a,b";c;d', "1;2;3"]) == ";"

    def test_single_field_header_does_not_mislead(self):
        """A one-column header must not defeat detection."""
        assert detect_delimiter(["Titulo", "a;b;c", "1;2;3"]) == ";"

    def test_comma_wins_tie_over_semicolon(self):
        assert detect_delimiter(["a,b;c", "1,2;3"]) == ","

    def test_tab_wins_tie_over_pipe(self):
        assert detect_delimiter(["a\tb|c", "1\t2|3"]) == "\t"

    def test_consistency_wins_over_frequency(self):
        """Semicolon appears twice on every line; comma only once, on one line."""
        lines = ["a;b;c", "1;2;3", "x;y;z", "a,b;c;d"]
        assert detect_delimiter(lines) == ";"

    def test_consistent_delimiter_beats_more_frequent_one(self):
        lines = ["a|b,c,d,e", "1|2,3", "4|5,6,7,8,9"]
        assert detect_delimiter(lines) == "|"

    def test_is_deterministic(self):
        lines = ["a;b,c", "1;2,3", "x|y"]
        assert len({detect_delimiter(lines) for _ in range(5)}) == 1

    def test_logs_detected_delimiter(self, caplog):
        caplog.set_level(logging.DEBUG)
        detect_delimiter(["a;b", "1;2"])
        assert "Detected delimiter ';'" in caplog.text


class TestScoreDelimiter:
    """Tests for the per-candidate score."""

    def test_absent_candidate_scores_negative(self):
        assert score_delimiter(["abc", "def"], ",") == -1

    def test_uses_midpoint_of_sorted_non_zero_counts(self):
        # non-zero counts sorted: [1, 2, 2] -> typical count 2 (two lines)
        lines = ["a,b,c", "a,b", "a,b,c", "abc"]
        assert score_delimiter(lines, ",") == 2 * CONSISTENCY_WEIGHT + 3

    def test_even_number_of_counts_takes_upper_midpoint(self):
        # sorted [1, 3] -> index 1 -> typical count 3
        lines = ["a,b", "a,b,c,d"]
        assert score_delimiter(lines, ",") == 1 * CONSISTENCY_WEIGHT + 2
