# ledger/services/money.py

"""
MONEY HELPERS

Report contract (same as every accounting endpoint):
- major-unit numbers are floats rounded to 2dp
- *_minor values are exact ints in the smallest currency unit
- internal arithmetic stays in Decimal at full precision
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0.00")
TWOPLACES = Decimal("0.01")
WHOLE = Decimal("1")


def q2(amount: Decimal | None) -> Decimal:
    return (amount or ZERO).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def q0(amount: Decimal | None) -> Decimal:
    return (amount or ZERO).quantize(WHOLE, rounding=ROUND_HALF_UP)


def to_major_number(amount: Decimal | None) -> float:
    return float(q2(amount))


def to_minor_int(amount: Decimal | None) -> int:
    return int((q2(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def money_fields(name: str, amount: Decimal | None) -> dict:
    """Emit `name` (float) and `name_minor` (int) for one amount."""
    return {
        name: to_major_number(amount),
        f"{name}_minor": to_minor_int(amount),
    }


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Division guard: a zero denominator yields 0, never inf/NaN."""
    if denominator == 0:
        return ZERO
    return numerator / denominator
