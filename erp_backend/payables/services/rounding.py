# payables/services/rounding.py

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value) -> Decimal:
    """
    Coerce request / model values to Decimal. None and "" count as zero.
    Floats go through str() so 0.1 stays 0.1.
    """
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a number: {value!r}") from exc

    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def round2(value) -> Decimal:
    """
    Round to 2 decimal places, halves away from zero.

    round2(1.005) == Decimal("1.01"); round2(-1.005) == Decimal("-1.01").
    """
    return to_decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
