from decimal import Decimal

import pytest

from catering.pricing.money import add, clamp, from_cents, multiply, round2, subtract, to_cents, to_decimal, total


@pytest.mark.parametrize("value, expected", [
    (None, Decimal("0")),
    (float("nan"), Decimal("0")),
    (float("inf"), Decimal("0")),
    ("abc", Decimal("0")),
    ("", Decimal("0")),
    (Decimal("NaN"), Decimal("0")),
    (" 12.50 ", Decimal("12.50")),
    (3, Decimal("3")),
    (0.1, Decimal("0.1")),
])
def test_to_decimal_coerces_or_falls_back_to_zero(value, expected):
    assert to_decimal(value) == expected


def test_round2_is_half_up():
    assert round2("2.675") == Decimal("2.68")
    assert round2("2.665") == Decimal("2.67")
    assert round2("-1.005") == Decimal("-1.01")
    assert round2(1) == Decimal("1.00")


def test_repeated_addition_does_not_drift():
    """Ten additions of 0.10 must be exactly 1.00, unlike binary floats."""
    assert total([0.1] * 10) == Decimal("1.00")
    assert add(0.1, 0.2) == Decimal("0.30")


def test_subtract_clamps_at_zero():
    assert subtract("10.00", "2.50") == Decimal("7.50")
    assert subtract("10.00", "12.00") == Decimal("0.00")


def test_multiply_rounds_the_product():
    assert multiply("3.335", 1) == Decimal("3.34")
    assert multiply("8.99", 3) == Decimal("26.97")


def test_clamp_bounds():
    assert clamp(-5, 0, 100) == Decimal("0")
    assert clamp(150, 0, 100) == Decimal("100")
    assert clamp(42, 0) == Decimal("42")


def test_cents_conversion_is_exact():
    assert to_cents("19.99") == 1999
    assert to_cents(None) == 0
    assert from_cents(1999) == Decimal("19.99")
