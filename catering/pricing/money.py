"""
Fixed-point money helpers.

Every currency amount in the engine is a ``Decimal`` with exactly two fractional
digits. Callers may hand in ints, floats, strings or Decimals; anything that is
not a finite number (None, NaN, infinity, "abc") is treated as zero.
"""
from __future__ import annotations

import math
import numbers
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Coerce ``value`` to a finite Decimal, falling back to zero."""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal(0)
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return Decimal(0)
        # str() gives the shortest repr, so 0.1 stays 0.1 and not 0.1000000000000000055...
        return Decimal(str(value))
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    # strings, numpy floats and anything else with a numeric text form
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal(0)
    return parsed if parsed.is_finite() else Decimal(0)


def round2(value: Any) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def add(*values: Any) -> Decimal:
    return round2(sum((to_decimal(v) for v in values), Decimal(0)))


def total(values: Iterable[Any]) -> Decimal:
    """Sum an iterable of amounts; None entries count as zero."""
    return add(*values)


def subtract(minuend: Any, subtrahend: Any) -> Decimal:
    """Subtract and clamp at zero; totals are never negative."""
    return max(ZERO, round2(to_decimal(minuend) - to_decimal(subtrahend)))


def multiply(unit_price: Any, quantity: Any) -> Decimal:
    return round2(to_decimal(unit_price) * to_decimal(quantity))


def clamp(value: Any, low: Any = 0, high: Optional[Any] = None) -> Decimal:
    """Clamp ``value`` into [low, high]; ``high`` of None means unbounded."""
    result = max(to_decimal(low), to_decimal(value))
    if high is not None:
        result = min(result, to_decimal(high))
    return result


def to_cents(value: Any) -> int:
    """Exact integer number of cents, used for vectorised sums in pandas."""
    return int(round2(value) * 100)


def from_cents(cents: Any) -> Decimal:
    return round2(to_decimal(cents) / HUNDRED)
