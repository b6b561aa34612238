"""Tests for the ${...} tokenizer."""

import pytest
from dollarbrace.lib.parser.tokenizer import (
    placeholder_end,
    placeholders_scan,
    tokens_split,
)
from dollarbrace.models.dataModel import Token


def test_empty_input():
    assert tokens_split("") == []


def test_no_placeholders():
    assert tokens_split("plain text") == [Token("plain text")]


def test_simple():
    tokens = tokens_split("${a}")
    assert len(tokens) == 1
    assert tokens[0].is_property
    assert tokens[0].value == "a"


def test_nested():
    tokens = tokens_split("${a_${b}}")
    assert tokens == [Token("a_${b}", is_property=True)]


def test_multiple():
    tokens = tokens_split("${a} ${b}")
    assert tokens == [
        Token("a", is_property=True),
        Token(" "),
        Token("b", is_property=True),
    ]


def test_unmatched_closer_is_literal():
    tokens = tokens_split("${abc} }")
    assert tokens[1] == Token(" }")


def test_unmatched_trailing_opener():
    tokens = tokens_split("${abc} ${a")
    assert tokens == [Token("abc", is_property=True), Token(" ${a")]


def test_unmatched_opener_stops_tokenizing():
    tokens = tokens_split("x ${a ${b}")
    assert tokens == [Token("x ${a ${b}")]


def test_plain_braces_inside_placeholder():
    tokens = tokens_split("${map{key}} rest")
    assert tokens == [Token("map{key}", is_property=True), Token(" rest")]


def test_plain_braces_outside_placeholder():
    assert tokens_split("{not} a ${p}") == [
        Token("{not} a "),
        Token("p", is_property=True),
    ]


def test_double_dollar_still_opens():
    tokens = tokens_split("${a$${b}}")
    assert tokens == [Token("a$${b}", is_property=True)]


def test_empty_placeholder():
    assert tokens_split("${}") == [Token("", is_property=True)]


@pytest.mark.parametrize(
    "text",
    [
        "no placeholders",
        "${a}",
        "prefix ${a} middle ${b_${c}} suffix",
        "${oneof:${x},y} and {braces}",
        "$ { $} {} ${raw:{}}",
    ],
)
def test_tokens_reproduce_input(text):
    assert "".join(token.source() for token in tokens_split(text)) == text


def test_placeholder_end():
    assert placeholder_end("${a}", 0) == 3
    assert placeholder_end("x${a${b}}y", 1) == 8
    assert placeholder_end("${a", 0) is None


def test_scan_lists_placeholders():
    result = placeholders_scan("${a} and ${b_${c}}")
    assert result.placeholders == ["a", "b_${c}"]
    assert result.dangling is None


def test_scan_reports_dangling_opener():
    result = placeholders_scan("${a} then ${broken")
    assert result.placeholders == ["a"]
    assert result.dangling == "${broken"
