from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert a price-like value to Decimal without float artefacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_currency(value: Number) -> Decimal:
    """Round half-up to a whole currency unit (4499.5 -> 4500)."""
    return to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def format_amount(value: Number) -> str:
    """Thousands-separated amount, without decimals for whole units."""
    amount = to_decimal(value)
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"
