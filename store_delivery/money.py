"""Integer money helpers. All amounts are in minor currency units."""

from decimal import ROUND_HALF_UP, Decimal


def _to_decimal(value) -> Decimal:
    # str() keeps floats like 12.5 exact instead of their binary expansion.
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value) -> int:
    """Round to the nearest whole minor unit, halves away from zero."""
    return int(_to_decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def apply_percentage_discount(amount: int, percent: float) -> int:
    """Return *amount* reduced by *percent* percent, rounded half up.

    A percentage above 100 yields a negative amount; callers clamp.
    """
    factor = (Decimal(100) - _to_decimal(percent)) / Decimal(100)
    return round_half_up(Decimal(amount) * factor)


def percentage_of(amount: int, percent: float) -> int:
    """Return *percent* percent of *amount*, rounded half up."""
    return round_half_up(Decimal(amount) * _to_decimal(percent) / Decimal(100))


def format_currency(amount: int, symbol: str = "") -> str:
    """Format minor units as a major-unit string, e.g. 150000 -> "1,500.00"."""
    major = Decimal(amount) / Decimal(100)
    return f"{symbol}{major:,.2f}"
