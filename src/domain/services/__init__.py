"""Domain services package."""

from .convergence import generate_financial_statements
from .normalization import build_year_drivers, normalize_series
from .ratios import ebitda_margin, operating_cash_margin, safe_ratio
from .statement_builder import build_year_statements, opening_position
from .validation import validate_driver_sign, validate_statement_inputs

__all__ = [
    "generate_financial_statements",
    "build_year_drivers",
    "normalize_series",
    "ebitda_margin",
    "operating_cash_margin",
    "safe_ratio",
    "build_year_statements",
    "opening_position",
    "validate_driver_sign",
    "validate_statement_inputs",
]
