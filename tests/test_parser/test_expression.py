"""Tests for the expression resolver."""

import pytest
from dollarbrace.lib.errors import ExpressionEvaluationError, PropertyNotFoundError
from dollarbrace.lib.parser.base import get_filter
from dollarbrace.lib.parser.expression import ExpressionResolver, expression_evaluate


@pytest.mark.parametrize(
    "expression,expected",
    [
        ("3+3", "6"),
        ("2-1", "1"),
        ("7/2", "3.5"),
        ("7//2", "3"),
        ("2**10", "1024"),
        ("-(4 % 3)", "-1"),
        ("'ab' * 2", "abab"),
        ("1 < 2 <= 2", "True"),
        ("1 < 2 > 3", "False"),
        ("not 0", "True"),
        ("0 or 'default'", "default"),
        ("1 and 0", "0"),
        ("'yes' if 3 > 2 else 'no'", "yes"),
        ("2 in (1, 2)", "True"),
        ("[1, 2]", "[1, 2]"),
    ],
)
def test_expression_evaluate(expression, expected):
    assert expression_evaluate(expression) == expected


@pytest.mark.parametrize(
    "expression,error",
    [
        ("__import__('os')", ValueError),
        ("x + 1", ValueError),
        ("'a'.upper()", ValueError),
        ("2 ** 100000", ValueError),
        ("'x' * 10**10", ValueError),
        ("[0] * 10**9", ValueError),
        ("10**9 * (0,)", ValueError),
        ("1/0", ZeroDivisionError),
        ("1 +", SyntaxError),
        ("'a' - 1", TypeError),
    ],
)
def test_expression_rejects(expression, error):
    with pytest.raises(error):
        expression_evaluate(expression)


def test_simple():
    property_filter = get_filter(ExpressionResolver())
    assert property_filter.resolve_name("py:3+3") == "6"
    assert property_filter.resolve_name("py: 2 * 21 ") == "42"


def test_no_prefix():
    with pytest.raises(PropertyNotFoundError):
        get_filter(ExpressionResolver()).resolve_name("3+3")


def test_forced_failure_is_fatal():
    with pytest.raises(ExpressionEvaluationError) as exc_info:
        get_filter(ExpressionResolver()).resolve_name("py: asdf")
    assert exc_info.value.expression == "asdf"


def test_forced_failure_is_not_swallowed_by_chain():
    property_filter = get_filter(ExpressionResolver(), {"py: asdf": "never"})
    with pytest.raises(ExpressionEvaluationError):
        property_filter.resolve_name("py: asdf")


def test_without_prefix_soft_failure():
    resolver = ExpressionResolver(use_without_prefix=True)
    assert resolver.prefix is None
    property_filter = get_filter(resolver, {"name": "from table"})
    assert property_filter.resolve_name("1+1") == "2"
    assert property_filter.resolve_name("name") == "from table"


def test_compound():
    property_filter = get_filter(
        ExpressionResolver(),
        {"test1": "${py:3+3}", "test2": "${test${py:2-1}}"},
    )
    assert property_filter.resolve_name("test2") == "6"


def test_compound_not_found():
    property_filter = get_filter(ExpressionResolver(), {"test2": "${test${py:2-1}}"})
    with pytest.raises(PropertyNotFoundError):
        property_filter.resolve_name("test2")


def test_nested_placeholders_in_expression():
    property_filter = get_filter(ExpressionResolver(), {"retries": "3"})
    assert property_filter.substitute("${py:${retries} * 2}") == "6"


def test_custom_prefix():
    property_filter = get_filter(ExpressionResolver(prefix="calc:"))
    assert property_filter.resolve_name("calc:1+2") == "3"


def test_repetition_limit():
    assert expression_evaluate("'ab' * 50000") == "ab" * 50000
    with pytest.raises(ValueError):
        expression_evaluate("'ab' * 50001")


def test_oversized_repetition_without_prefix_is_not_found():
    property_filter = get_filter(ExpressionResolver(use_without_prefix=True))
    with pytest.raises(PropertyNotFoundError):
        property_filter.resolve_name("'x' * 10**10")
