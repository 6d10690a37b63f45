"""Domain constants for the projection engine."""

from decimal import Decimal

from src.utils.decimal_utils import CURRENCY_QUANTUM

MODEL_START_YEAR = 2023
MODEL_END_YEAR = 2052
MODEL_DURATION_YEARS = MODEL_END_YEAR - MODEL_START_YEAR + 1

BALANCE_TOLERANCE = Decimal("0.01")
DEFAULT_MAX_PASSES = 10

# Largest absolute amount accepted for a driver or opening balance.
MAX_AMOUNT = Decimal("1e15")
# Decimal precision used while generating statements.
DECIMAL_PRECISION = 50

REQUIRED_DRIVERS = (
    "revenue",
    "staff_costs",
    "rent",
    "opex",
    "capex",
    "depreciation",
)
OPTIONAL_DRIVERS = (
    "cogs",
    "interest",
    "deferred_revenue",
    "financing",
)
# Drivers that may legitimately be negative.
SIGNED_DRIVERS = ("interest", "financing")


__all__ = [
    "MODEL_START_YEAR",
    "MODEL_END_YEAR",
    "MODEL_DURATION_YEARS",
    "CURRENCY_QUANTUM",
    "BALANCE_TOLERANCE",
    "DEFAULT_MAX_PASSES",
    "MAX_AMOUNT",
    "DECIMAL_PRECISION",
    "REQUIRED_DRIVERS",
    "OPTIONAL_DRIVERS",
    "SIGNED_DRIVERS",
]
