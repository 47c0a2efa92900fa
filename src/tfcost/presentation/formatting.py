"""Locale-independent currency and percentage formatting."""

from decimal import Decimal, ROUND_HALF_UP

_CENT = Decimal("0.01")


def format_currency(amount: float) -> str:
    """
    Format a USD amount with two decimals and thousands separators.

    Examples:
        1234.5 -> "$1,234.50"
        -5 -> "-$5.00"
    """
    rounded = Decimal(str(abs(amount))).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 and rounded != 0 else ""
    return f"{sign}${rounded:,.2f}"


def format_percentage(percentage: float) -> str:
    """One decimal place, "+" prefix only for positive values."""
    rounded = round(percentage, 1) or 0.0
    sign = "+" if rounded > 0 else ""
    return f"{sign}{rounded:.1f}%"


def format_signed_currency(amount: float) -> str:
    """Currency with an explicit "+" for increases, used for cost deltas."""
    sign = "+" if round(amount, 2) > 0 else ""
    return f"{sign}{format_currency(amount)}"
