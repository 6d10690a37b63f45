"""Domain models for projected financial statements."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Sequence


@dataclass(frozen=True)
class StatementInputs:
    """Horizon-aligned driver series for one projection run.

    Every sequence is indexed by model year and must share the length of
    ``revenue``. Optional series default to zeros when left empty.

    Attributes:
        revenue: Revenue per year.
        staff_costs: Staff costs per year.
        rent: Rent per year.
        opex: Other operating expenses per year.
        capex: Capital expenditure per year.
        depreciation: Depreciation charge per year.
        beginning_cash: Cash held at the start of the first year.
        cogs: Optional cost of goods sold per year.
        interest: Optional externally modeled interest charge per year.
        deferred_revenue: Optional year-end deferred revenue balances.
        financing: Optional external financing cash flow per year.
        tax_rate: Flat tax rate applied to earnings before tax.
        opening_fixed_assets: Net fixed assets before the first year.
        opening_retained_earnings: Retained earnings before the first year.
        opening_deferred_revenue: Deferred revenue before the first year.
    """

    revenue: Sequence
    staff_costs: Sequence
    rent: Sequence
    opex: Sequence
    capex: Sequence
    depreciation: Sequence
    beginning_cash: Decimal | int | float | str = Decimal("0")
    cogs: Sequence = ()
    interest: Sequence = ()
    deferred_revenue: Sequence = ()
    financing: Sequence = ()
    tax_rate: Decimal | int | float | str = Decimal("0")
    opening_fixed_assets: Decimal | int | float | str = Decimal("0")
    opening_retained_earnings: Decimal | int | float | str = Decimal("0")
    opening_deferred_revenue: Decimal | int | float | str = Decimal("0")

    @property
    def horizon(self) -> int:
        """Return the number of modeled years."""
        return len(self.revenue)


@dataclass(frozen=True)
class YearDrivers:
    """Normalized drivers for a single model year."""

    year: int
    revenue: Decimal
    staff_costs: Decimal
    rent: Decimal
    opex: Decimal
    capex: Decimal
    depreciation: Decimal
    cogs: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    deferred_revenue: Decimal = Decimal("0")
    financing: Decimal = Decimal("0")


@dataclass(frozen=True)
class BalancePosition:
    """Carried-forward balances between consecutive years.

    Attributes:
        cash: Cash balance.
        fixed_assets: Net fixed-asset balance.
        retained_earnings: Accumulated retained earnings.
        deferred_revenue: Deferred revenue balance.
        contributed_capital: Capital contributed by owners and financing.
    """

    cash: Decimal
    fixed_assets: Decimal
    retained_earnings: Decimal
    deferred_revenue: Decimal
    contributed_capital: Decimal


@dataclass(frozen=True)
class ProfitLossStatement:
    """Profit and loss record for one year."""

    year: int
    revenue: Decimal
    cogs: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    ebitda: Decimal
    depreciation: Decimal
    ebit: Decimal
    interest: Decimal
    taxes: Decimal
    net_income: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet record for one year.

    ``suspense`` holds circular charges re-evaluated on the closing position
    that the booked charges have not absorbed yet.
    """

    year: int
    cash: Decimal
    fixed_assets: Decimal
    total_assets: Decimal
    deferred_revenue: Decimal
    suspense: Decimal
    total_liabilities: Decimal
    contributed_capital: Decimal
    retained_earnings: Decimal
    total_equity: Decimal
    total_liabilities_and_equity: Decimal
    is_balanced: bool
    balance_difference: Decimal


@dataclass(frozen=True)
class CashFlowStatement:
    """Cash flow record for one year."""

    year: int
    net_income: Decimal
    depreciation: Decimal
    working_capital_change: Decimal
    operating_cash_flow: Decimal
    capex: Decimal
    investing_cash_flow: Decimal
    financing_cash_flow: Decimal
    net_cash_change: Decimal
    beginning_cash: Decimal
    ending_cash: Decimal


@dataclass(frozen=True)
class YearStatements:
    """All three statements for one year plus its closing position."""

    profit_loss: ProfitLossStatement
    balance_sheet: BalanceSheet
    cash_flow: CashFlowStatement
    closing: BalancePosition


class ConvergenceStatus(str, Enum):
    """Lifecycle states of the convergence driver."""

    INITIALIZING = "INITIALIZING"
    ITERATING = "ITERATING"
    CONVERGED = "CONVERGED"
    EXHAUSTED = "EXHAUSTED"


@dataclass(frozen=True)
class ConvergenceReport:
    """Outcome of the convergence loop.

    Attributes:
        passes: Number of full-horizon passes consumed.
        balanced: True when every balance sheet balanced within tolerance.
        tolerance: Absolute tolerance used for the balance check.
        status: Terminal driver state (CONVERGED or EXHAUSTED).
        max_balance_difference: Largest absolute balance difference seen in
            the returned statements.
    """

    passes: int
    balanced: bool
    tolerance: Decimal
    status: ConvergenceStatus
    max_balance_difference: Decimal = Decimal("0")


@dataclass(frozen=True)
class FinancialStatements:
    """Three-statement projection with its convergence report."""

    profit_loss: tuple[ProfitLossStatement, ...]
    balance_sheet: tuple[BalanceSheet, ...]
    cash_flow: tuple[CashFlowStatement, ...]
    convergence: ConvergenceReport

    @property
    def years(self) -> tuple[int, ...]:
        """Return the calendar years covered by the statements."""
        return tuple(statement.year for statement in self.profit_loss)


__all__ = [
    "StatementInputs",
    "YearDrivers",
    "BalancePosition",
    "ProfitLossStatement",
    "BalanceSheet",
    "CashFlowStatement",
    "YearStatements",
    "ConvergenceStatus",
    "ConvergenceReport",
    "FinancialStatements",
]
