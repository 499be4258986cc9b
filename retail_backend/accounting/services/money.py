# accounting/services/money.py

"""
MONEY HELPERS

Fixed-point money for the ledger:
- Internally every amount is a Decimal quantized to 2dp (ROUND_HALF_UP)
- Equality is checked in integer minor units (no float epsilon)
- Floats only appear at the API boundary (_to_major_number)
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.conf import settings

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def q2(amount) -> Decimal:
    return Decimal(str(amount or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def parse_money(value) -> Decimal:
    """
    Coerce user input (str/int/float/Decimal/None) to a 2dp Decimal.

    Raises ValueError for anything that is not a finite number.
    """
    if value is None or value == "":
        return ZERO

    if isinstance(value, bool):
        raise ValueError(f"Invalid money value: {value!r}")

    try:
        amt = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValueError(f"Invalid money value: {value!r}") from exc

    if not amt.is_finite():
        raise ValueError(f"Invalid money value: {value!r}")

    try:
        return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Money value out of range: {value!r}") from exc


def to_major_number(amount) -> float:
    return float(q2(amount))


def to_minor_int(amount) -> int:
    return int((q2(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def format_money(amount) -> str:
    symbol = getattr(settings, "ACCOUNTING_CURRENCY_SYMBOL", "$")
    value = q2(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
