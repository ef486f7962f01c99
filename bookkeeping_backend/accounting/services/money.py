# accounting/services/money.py

"""
MONEY POLICY

- Amounts enter as decimals (strings, ints, floats or Decimal) and are
  normalized to 2dp with ROUND_HALF_UP.
- Inside the engine every amount is an integer number of minor units
  (cents); sums never accumulate floating-point drift.
- Reports emit both a major-unit float and the exact minor-unit int.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from accounting.services.exceptions import ValidationError

TWOPLACES = Decimal("0.01")

# |Σdebit − Σcredit| and |balance| comparisons tolerate one minor unit (0.01).
BALANCE_TOLERANCE_MINOR = 1

# Largest amount a journal line column (14 digits, 2dp) can hold.
MAX_AMOUNT_MINOR = 10**14 - 1


def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")

    try:
        amt = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amt.is_finite():
            raise InvalidOperation(value)
        return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValidationError(
            f"Invalid money value: {value!r}", rule="invalid_amount"
        ) from exc


def to_minor(value) -> int:
    return int((to_decimal(value) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_minor(minor: int) -> Decimal:
    return (Decimal(minor) / 100).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def to_major_number(minor: int) -> float:
    return float(from_minor(minor))


def within_tolerance(minor: int) -> bool:
    return abs(minor) <= BALANCE_TOLERANCE_MINOR


def money_fields(key: str, minor: int) -> dict:
    """`money_fields("amount", 25000)` -> {"amount": 250.0, "amount_minor": 25000}"""
    return {key: to_major_number(minor), f"{key}_minor": minor}
