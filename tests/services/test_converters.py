"""Standard Converters — tests for built-in wire-string conversions.

Tests cover:
    - to_int/to_float/to_bool/split_csv success paths
    - Failures return ConversionError naming field and value
    - converter_for declares types and kind
"""

import pytest

from apibind.core.errors import ConversionError
from apibind.services.converters import (
    CONVERTER,
    converter_for,
    split_csv,
    to_bool,
    to_float,
    to_int,
)


def test_to_int(ctx):
    assert to_int.operate(ctx, "age", "42") == (42, None)
    assert to_int.kind == CONVERTER
    assert to_int.in_type is str
    assert to_int.out_type is int


def test_to_int_failure_returns_conversion_error(ctx):
    value, err = to_int.operate(ctx, "age", "abc")
    assert value is None
    assert isinstance(err, ConversionError)
    assert err.field == "age"
    assert err.value == "abc"


def test_to_int_none_is_a_conversion_error(ctx):
    _, err = to_int.operate(ctx, "age", None)
    assert isinstance(err, ConversionError)


def test_to_float(ctx):
    assert to_float.operate(ctx, "ratio", "0.5") == (0.5, None)


@pytest.mark.parametrize("raw, expected", [
    ("true", True), ("TRUE", True), ("1", True), ("yes", True), ("on", True),
    ("false", False), ("0", False), (" no ", False), ("off", False),
    (True, True),
])
def test_to_bool(ctx, raw, expected):
    assert to_bool.operate(ctx, "flag", raw) == (expected, None)


def test_to_bool_rejects_other_strings(ctx):
    _, err = to_bool.operate(ctx, "flag", "maybe")
    assert isinstance(err, ConversionError)
    assert "not a boolean" in err.message


def test_split_csv(ctx):
    assert split_csv.operate(ctx, "ids", "a, b,,c ") == (["a", "b", "c"], None)


def test_split_csv_non_string(ctx):
    _, err = split_csv.operate(ctx, "ids", 12)
    assert isinstance(err, ConversionError)


def test_converter_for_custom_kind(ctx):
    op = converter_for(str, str, str.lower, kind="lower")
    assert op.kind == "lower"
    assert op.operate(ctx, "name", "ADA") == ("ada", None)
