"""Domain models package."""

from .statements import (
    BalancePosition,
    BalanceSheet,
    CashFlowStatement,
    ConvergenceReport,
    ConvergenceStatus,
    FinancialStatements,
    ProfitLossStatement,
    StatementInputs,
    YearDrivers,
    YearStatements,
)

__all__ = [
    "BalancePosition",
    "BalanceSheet",
    "CashFlowStatement",
    "ConvergenceReport",
    "ConvergenceStatus",
    "FinancialStatements",
    "ProfitLossStatement",
    "StatementInputs",
    "YearDrivers",
    "YearStatements",
]
