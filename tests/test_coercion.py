"""
Type coercion: canonical string form, predicates and converters.
"""
import pytest

from component_props.codegen.core.coercion import (
    UNDEFINED_MARKER,
    as_boolean,
    as_number,
    coerce_explicit,
    format_number,
    is_boolean,
    is_number,
    parse_raw,
    values_equal,
)


# ─── parse_raw ──────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "raw, expected",
    [
        (True, "true"),
        (False, "false"),
        (12, "12"),
        (12.0, "12"),
        (1.5, "1.5"),
        (None, UNDEFINED_MARKER),
        ("Click", "Click"),
    ],
)
def test_parse_raw_canonical_form(raw, expected):
    assert parse_raw(raw) == expected


def test_format_number_drops_integral_fraction():
    assert format_number(3.0) == "3"
    assert format_number(-0.25) == "-0.25"
    assert format_number(7) == "7"


# ─── predicates ─────────────────────────────────────────────────────────────

def test_is_boolean_is_exact_and_case_sensitive():
    assert is_boolean("true")
    assert is_boolean("false")
    assert not is_boolean("True")
    assert not is_boolean("yes")
    assert not is_boolean("")


@pytest.mark.parametrize("text", ["0", "12", "-3", "+4", "1.5", ".5", "2.", "1e3", "-2.5E-2"])
def test_is_number_accepts_decimal_literals(text):
    assert is_number(text)


@pytest.mark.parametrize("text", ["", " ", " 1", "NaN", "Infinity", "-Infinity", "1.2.3", "0x10", "abc"])
def test_is_number_rejects_everything_else(text):
    assert not is_number(text)


# ─── converters ─────────────────────────────────────────────────────────────

def test_as_boolean():
    assert as_boolean("true") is True
    assert as_boolean("false") is False
    assert as_boolean("anything") is False


def test_as_number_keeps_integers_integral():
    assert as_number("12") == 12
    assert isinstance(as_number("12"), int)
    assert as_number("1.5") == 1.5
    assert isinstance(as_number("1e2"), float)


def test_as_number_of_non_number_is_zero():
    assert as_number("large") == 0


def test_coerce_explicit_precedence():
    assert coerce_explicit("true") is True
    assert coerce_explicit("3") == 3
    assert coerce_explicit("primary") == "primary"


def test_values_equal_never_mixes_booleans_and_numbers():
    assert values_equal(True, True)
    assert not values_equal(True, 1)
    assert not values_equal(0, False)
    assert values_equal(2, 2.0)
    assert values_equal("a", "a")
    assert not values_equal("1", 1)
