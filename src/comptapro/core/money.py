"""Decimal helpers for monetary amounts."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Debit/credit tolerance when checking that an entry balances
BALANCE_TOLERANCE = Decimal("0.01")


def to_decimal(value: Optional[Union[Decimal, int, float, str]]) -> Decimal:
    """Coerce a value to Decimal, treating None and blanks as zero."""
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Round an amount to 2 decimals, half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
