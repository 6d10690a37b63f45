"""Helpers for Decimal normalization and currency arithmetic."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY_QUANTUM = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, adapters, or callers.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        decimal.InvalidOperation: If the value cannot be parsed.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_currency(value) -> Decimal:
    """Round a value to cents using half-up rounding.

    Args:
        value: Numeric value to round.

    Returns:
        Decimal: Value quantized to two decimal places.
    """
    rounded = coerce_decimal(value).quantize(
        CURRENCY_QUANTUM,
        rounding=ROUND_HALF_UP,
    )
    # -0.00 -> 0.00
    return rounded if rounded else abs(rounded)


def is_finite_number(value) -> bool:
    """Return True when the value parses to a finite Decimal."""
    if isinstance(value, bool):
        return False
    try:
        return coerce_decimal(value).is_finite()
    except (InvalidOperation, ValueError, TypeError):
        return False


def within_tolerance(difference: Decimal, tolerance: Decimal) -> bool:
    """Return True when the absolute difference does not exceed tolerance."""
    return abs(difference) <= tolerance


__all__ = [
    "CURRENCY_QUANTUM",
    "coerce_decimal",
    "round_currency",
    "is_finite_number",
    "within_tolerance",
]
