"""Domain package for the projection engine core."""

from .constants import (
    BALANCE_TOLERANCE,
    DEFAULT_MAX_PASSES,
    MODEL_END_YEAR,
    MODEL_START_YEAR,
)
from .errors import (
    InvalidInputError,
    StatementEngineError,
    UndefinedRatioError,
)
from .models import (
    BalanceSheet,
    CashFlowStatement,
    ConvergenceReport,
    ConvergenceStatus,
    FinancialStatements,
    ProfitLossStatement,
    StatementInputs,
)
from .policies import CashInterestPolicy, InterestPolicy, NoInterestPolicy
from .services import generate_financial_statements

__all__ = [
    "BALANCE_TOLERANCE",
    "DEFAULT_MAX_PASSES",
    "MODEL_END_YEAR",
    "MODEL_START_YEAR",
    "InvalidInputError",
    "StatementEngineError",
    "UndefinedRatioError",
    "BalanceSheet",
    "CashFlowStatement",
    "ConvergenceReport",
    "ConvergenceStatus",
    "FinancialStatements",
    "ProfitLossStatement",
    "StatementInputs",
    "CashInterestPolicy",
    "InterestPolicy",
    "NoInterestPolicy",
    "generate_financial_statements",
]
