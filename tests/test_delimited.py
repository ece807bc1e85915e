"""Tests for delimited-text tokenizing and quoting."""

import pytest

from core.delimited import join_fields, quote_field, split_lines, tokenize_line


def test_splits_and_trims_fields():
    assert tokenize_line(" a , b,c ") == ["a", "b", "c"]


def test_empty_line_yields_one_empty_field():
    assert tokenize_line("") == [""]


def test_trailing_delimiter_yields_empty_last_field():
    assert tokenize_line("2026-03-15,Concierto Gala,") == ["2026-03-15", "Concierto Gala", ""]


def test_delimiter_inside_quotes_is_literal():
    assert tokenize_line('"Ensayo, sala 2",2026-03-10') == ["Ensayo, sala 2", "2026-03-10"]


def test_doubled_quotes_become_one_quote():
    assert tokenize_line('"Concierto ""Gala""",x') == ['Concierto "Gala"', "x"]


def test_semicolon_delimiter():
    assert tokenize_line('a;"b;c";d', ";") == ["a", "b;c", "d"]


def test_comma_is_content_with_semicolon_delimiter():
    assert tokenize_line("a,b;c", ";") == ["a,b", "c"]


def test_quote_field_doubles_quotes():
    assert quote_field('say "hi"') == '"say ""hi"""'
    assert quote_field(None) == '""'


@pytest.mark.parametrize("delimiter", [",", ";"])
def test_quoted_fields_survive_tokenizing(delimiter):
    fields = ['Concierto "Gala"', "a,b;c", "", '""', "plain", 'tail"']
    line = join_fields(fields, delimiter)
    assert tokenize_line(line, delimiter) == fields


def test_split_lines_only_breaks_on_cr_and_lf():
    assert split_lines("a\r\nb\rc\nd\x0be\x85f g") == ["a", "b", "c", "d\x0be\x85f g"]
