"""Output rounding: half away from zero for counts and cents."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
UNIT = Decimal("1")


def _to_decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the shortest repr, so 2.675 rounds like the number a user typed
    return Decimal(str(value))


def round_half_up(value: float | int | Decimal) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(_to_decimal(value).quantize(UNIT, rounding=ROUND_HALF_UP))


def to_cents(value: float | int | Decimal) -> Decimal:
    """Round a monetary amount to two decimal places, ties away from zero."""
    return _to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
