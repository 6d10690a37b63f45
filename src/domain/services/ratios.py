"""Derived ratios over projected statements."""

from decimal import ROUND_HALF_UP, Decimal

from src.domain.errors import UndefinedRatioError
from src.domain.models.statements import (
    CashFlowStatement,
    ProfitLossStatement,
)
from src.utils.decimal_utils import coerce_decimal

RATIO_QUANTUM = Decimal("0.0001")


def safe_ratio(numerator, denominator) -> Decimal:
    """Divide two values, refusing to produce NaN or Infinity.

    Args:
        numerator: Ratio numerator.
        denominator: Ratio denominator.

    Returns:
        Decimal: The ratio rounded to four decimal places.

    Raises:
        UndefinedRatioError: If the denominator is zero.
    """
    divisor = coerce_decimal(denominator)
    if divisor == 0:
        raise UndefinedRatioError(
            f"Ratio is undefined for denominator {divisor}"
        )
    return (coerce_decimal(numerator) / divisor).quantize(
        RATIO_QUANTUM,
        rounding=ROUND_HALF_UP,
    )


def ebitda_margin(profit_loss: ProfitLossStatement) -> Decimal:
    """Return EBITDA over revenue for one year."""
    return safe_ratio(profit_loss.ebitda, profit_loss.revenue)


def operating_cash_margin(
    cash_flow: CashFlowStatement,
    revenue: Decimal,
) -> Decimal:
    """Return operating cash flow over revenue for one year."""
    return safe_ratio(cash_flow.operating_cash_flow, revenue)


__all__ = [
    "safe_ratio",
    "ebitda_margin",
    "operating_cash_margin",
]
