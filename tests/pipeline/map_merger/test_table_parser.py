"""Tests for the delimited-text parser of the map merger."""

import pytest

from mapmerge.exceptions import ConfigurationError, DataValidationError
from mapmerge.pipeline.map_merger import table_parser as tp


def test_header_is_case_insensitive():
    upper = tp.parse_table("ID,Label,VALUE,Region\n1,North,10,5\n")
    lower = tp.parse_table("id,label,value,region\n1,North,10,5\n")
    assert upper == lower
    assert upper == [{"id": "1", "label": "North", "value": "10", "region": "5"}]


def test_header_names_are_trimmed():
    assert tp.parse_header(" ID ,  Label\t") == ["id", "label"]


def test_quoted_field_with_embedded_delimiter():
    rows = tp.parse_table('id,label,value,region\n1,"Region, North",10,5\n')
    assert rows == [
        {"id": "1", "label": "Region, North", "value": "10", "region": "5"}
    ]


def test_doubled_quote_is_literal():
    assert tp.split_fields('a,"say ""hi""",c') == ["a", 'say "hi"', "c"]
    assert tp.split_fields('x"y,z"w') == ["xy,zw"]


def test_short_row_is_padded():
    rows = tp.parse_table("id,label,value,region\n1,North\n")
    assert rows == [{"id": "1", "label": "North", "value": "", "region": ""}]


def test_extra_fields_are_ignored():
    rows = tp.parse_table("id,label\n1,North,extra,more\n")
    assert rows == [{"id": "1", "label": "North"}]


def test_blank_lines_and_crlf_are_dropped():
    text = "id,label\r\n\r\n   \r\n1,North\r\n\n2,South"
    assert tp.parse_table(text) == [
        {"id": "1", "label": "North"},
        {"id": "2", "label": "South"},
    ]


def test_leading_blank_lines_before_header():
    assert tp.parse_table("\n  \nid\np1\n") == [{"id": "p1"}]


def test_empty_and_header_only_input():
    assert tp.parse_table("") == []
    assert tp.parse_table(" \n\t\n") == []
    assert tp.parse_table("id,label,value,region\n") == []


def test_values_are_kept_raw():
    rows = tp.parse_table("id,label\n 1 , North \n")
    assert rows == [{"id": " 1 ", "label": " North "}]


def test_unterminated_quote_is_permissive_by_default():
    rows = tp.parse_table('id,label,value\n1,"open, field,3\n2,ok,4\n')
    assert rows[0] == {"id": "1", "label": "open, field,3", "value": ""}
    assert rows[1] == {"id": "2", "label": "ok", "value": "4"}


def test_unterminated_quote_fails_in_strict_mode():
    with pytest.raises(DataValidationError) as excinfo:
        tp.parse_table('id,label\n1,ok\n2,"open\n', strict=True)
    assert excinfo.value.context == {"row": 2}


def test_strict_mode_accepts_well_formed_quotes():
    rows = tp.parse_table('id,label\n1,"a, b"\n', strict=True)
    assert rows == [{"id": "1", "label": "a, b"}]


def test_custom_delimiter():
    rows = tp.parse_table('id;label\n1;"North; East"\n', delimiter=";")
    assert rows == [{"id": "1", "label": "North; East"}]


@pytest.mark.parametrize("delimiter", ["", ";;", '"'])
def test_invalid_delimiter_raises(delimiter):
    with pytest.raises(ConfigurationError):
        tp.parse_table("id\n1\n", delimiter=delimiter)
