"""Tests for CSVEncoder and the encode function."""

from collections import OrderedDict

import pytest

from csv_codec import CSVEncoder, UnsupportedValueType, decode, encode
from csv_codec.config import EncodeConfig
from csv_codec.encoder import resolve_columns


class TestEncodeBasics:
    """Tests for default encoding."""

    def test_simple_rows(self):
        rows = [{"nome": "Alice", "valor": "10"}, {"nome": "Bob", "valor": "20"}]
        assert encode(rows) == "nome,valor\nAlice,10\nBob,20"

    def test_custom_delimiter(self):
        assert encode([{"a": "1", "b": "2"}], delimiter=";") == "a;b\n1;2"

    def test_custom_newline(self):
        assert encode([{"a": "1"}, {"a": "2"}], newline="\r\n") == "a\r\n1\r\n2"

    def test_no_trailing_newline(self):
        assert not encode([{"a": "1"}]).endswith("\n")

    def test_empty_rows(self):
        assert encode([]) == ""

    def test_empty_rows_with_header(self):
        assert encode([], header=True) == ""

    def test_empty_rows_with_explicit_columns_writes_header(self):
        assert encode([], columns=["a", "b"]) == "a,b"

    def test_header_false(self):
        assert encode([{"a": "1", "b": "2"}], header=False) == "1,2"

    def test_later_rows_follow_first_row_keys(self):
        rows = [{"a": "1", "b": "2"}, {"b": "3", "c": "4"}]
        assert encode(rows) == "a,b\n1,2\n,3"


class TestEncodeColumns:
    """Tests for column projection."""

    def test_list_selects_and_orders(self):
        assert encode([{"a": "1", "b": "2", "c": "3"}], columns=["c", "a"]) == "c,a\n3,1"

    def test_missing_key_becomes_empty(self):
        assert encode([{"a": "1"}], columns=["a", "b"]) == "a,b\n1,"

    def test_mapping_renames_headers(self):
        result = encode(
            [{"name": "Alice", "value": "10"}],
            columns={"name": "Nome", "value": "Valor"},
        )
        assert result == "Nome,Valor\nAlice,10"

    def test_mapping_order_is_key_order(self):
        result = encode(
            [{"a": "1", "b": "2", "c": "3"}],
            columns=OrderedDict([("c", "Col C"), ("a", "Col A")]),
        )
        assert result == "Col C,Col A\n3,1"

    def test_mapping_without_header_still_projects(self):
        result = encode(
            [{"name": "Alice", "value": "10"}],
            header=False,
            columns={"name": "Nome", "value": "Valor"},
        )
        assert result == "Alice,10"

    def test_resolve_columns_without_rows_or_columns(self):
        assert resolve_columns([], None) == ([], [])


class TestEncodeEscaping:
    """Tests for value quoting."""

    def test_quotes_value_with_delimiter(self):
        assert encode([{"a": "hello, world"}]) == 'a\n"hello, world"'

    def test_escapes_double_quotes(self):
        assert encode([{"a": 'said "hi"'}]) == 'a\n"said ""hi"""'

    def test_quotes_line_breaks(self):
        assert encode([{"a": "line1\nline2"}]) == 'a\n"line1\nline2"'

    def test_escapes_header_names(self):
        assert encode([{"a,b": "1"}]) == '"a,b"\n1'

    def test_renamed_header_without_reserved_chars_is_not_quoted(self):
        result = encode([{"id": "1"}], delimiter=";", columns={"id": "ID (Não edite)"})
        assert result == "ID (Não edite)\n1"

    def test_comma_not_quoted_with_semicolon_delimiter(self):
        assert encode([{"a": "1,5"}], delimiter=";") == "a\n1,5"


class TestEncodeValues:
    """Tests for value rendering."""

    def test_none_becomes_empty(self):
        assert encode([{"a": None}]) == "a\n"

    def test_float(self):
        assert encode([{"a": 1500.5}]) == "a\n1500.5"

    def test_integral_float(self):
        assert encode([{"a": 10.0}]) == "a\n10"

    def test_booleans(self):
        assert encode([{"a": True, "b": False}]) == "a,b\ntrue,false"

    def test_zero_is_preserved(self):
        assert encode([{"a": 0}]) == "a\n0"

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedValueType, match="'a'"):
            encode([{"a": object()}])


class TestEncodeBom:
    """Tests for byte-order mark output."""

    def test_no_bom_by_default(self):
        assert not encode([{"a": "1"}]).startswith("\ufeff")

    def test_bom_prefix(self):
        result = encode([{"a": "1"}], bom=True)
        assert result == "\ufeffa\n1"

    def test_bom_on_empty_rows(self):
        assert encode([], bom=True) == "\ufeff"


class TestRoundTrip:
    """Tests for encode followed by decode."""

    def test_plain_rows(self):
        rows = [{"nome": "Alice", "valor": "10"}, {"nome": "Bob", "valor": "20"}]
        assert decode(encode(rows)) == rows

    def test_special_characters(self):
        rows = [{"nome": 'Empresa "X"', "desc": "valor, com virgula"}]
        assert decode(encode(rows)) == rows

    def test_embedded_line_breaks(self):
        rows = [{"a": "x\ny", "b": "z"}, {"a": "1", "b": "2"}]
        assert decode(encode(rows)) == rows

    def test_with_bom_and_crlf(self):
        rows = [{"a": "1", "b": "2"}]
        assert decode(encode(rows, bom=True, newline="\r\n")) == rows

    def test_semicolon_delimiter_is_detected_back(self):
        rows = [{"a": "1,5", "b": "2"}, {"a": "3", "b": "4,0"}]
        assert decode(encode(rows, delimiter=";")) == rows


class TestCSVEncoder:
    """Tests for the encoder class."""

    def test_from_config(self):
        encoder = CSVEncoder.from_config(EncodeConfig(delimiter="\t", bom=True))
        assert encoder.encode([{"a": "1", "b": "2"}]) == "\ufeffa\tb\n1\t2"

    def test_rejects_multi_character_delimiter(self):
        with pytest.raises(ValueError):
            CSVEncoder(delimiter="::")

    def test_rejects_auto_delimiter(self):
        with pytest.raises(ValueError):
            CSVEncoder(delimiter="auto")

    def test_rejects_empty_newline(self):
        with pytest.raises(ValueError):
            CSVEncoder(newline="")
