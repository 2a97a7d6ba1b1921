"""Decimal helpers shared by the scoring and P&L calculators."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_ONE = Decimal("1")
_TENTH = Decimal("0.1")
_CENT = Decimal("0.01")


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Convert to Decimal via ``str`` so float inputs keep their printed value."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal | float | int) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(to_decimal(value).quantize(_ONE, rounding=ROUND_HALF_UP))


def round_2dp(value: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def percent(count: int, total: int) -> int:
    """``round_half_up(100 * count / total)``; 0 when *total* is 0."""
    if total <= 0:
        return 0
    return round_half_up(Decimal(100 * count) / Decimal(total))


def round_1dp(value: Decimal) -> Decimal:
    """Round to one decimal place, halves away from zero."""
    return value.quantize(_TENTH, rounding=ROUND_HALF_UP)
