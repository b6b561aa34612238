"""Tests for the exception hierarchy and its messages."""

from dollarbrace.lib.errors import (
    CircularResolutionError,
    DollarBraceError,
    ExpressionEvaluationError,
    FilterIOError,
    PropertyNotFoundError,
    ResolutionError,
)


def test_not_found_message():
    assert str(PropertyNotFoundError("a")) == "Property not found: 'a'"


def test_not_found_chain_message():
    inner = PropertyNotFoundError("c")
    middle = PropertyNotFoundError("b", inner)
    outer = PropertyNotFoundError("a", middle)
    assert outer.trail() == ["a", "b", "c"]
    assert str(outer) == "Property not found: 'c' ['a' -> 'b' -> 'c']"


def test_not_found_same_name_is_not_chained():
    inner = PropertyNotFoundError("a")
    outer = PropertyNotFoundError("a", inner)
    assert outer.__cause__ is None
    assert str(outer) == "Property not found: 'a'"


def test_hierarchy():
    assert issubclass(PropertyNotFoundError, ResolutionError)
    assert issubclass(CircularResolutionError, ResolutionError)
    assert not issubclass(CircularResolutionError, PropertyNotFoundError)
    assert issubclass(FilterIOError, DollarBraceError)
    assert not issubclass(FilterIOError, ResolutionError)
    assert issubclass(ExpressionEvaluationError, DollarBraceError)


def test_circular_message():
    error = CircularResolutionError("loop")
    assert error.name == "loop"
    assert "loop" in str(error)


def test_io_error_message():
    error = FilterIOError("/tmp/x", "No such file")
    assert str(error) == "/tmp/x: No such file"
