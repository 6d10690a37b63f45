"""Per-year construction of the P&L, cash flow, and balance sheet."""

from decimal import Decimal

from src.domain.errors import InvalidInputError
from src.domain.models.statements import (
    BalancePosition,
    BalanceSheet,
    CashFlowStatement,
    ProfitLossStatement,
    StatementInputs,
    YearDrivers,
    YearStatements,
)
from src.domain.policies.interest import InterestPolicy
from src.utils.decimal_utils import (
    coerce_decimal,
    is_finite_number,
    round_currency,
    within_tolerance,
)


def opening_position(inputs: StatementInputs) -> BalancePosition:
    """Build the position carried into the first modeled year.

    Contributed capital absorbs whatever the opening assets are not funded by,
    so the opening balance sheet balances.

    Args:
        inputs: Validated statement inputs.

    Returns:
        BalancePosition: Opening balances.
    """
    cash = round_currency(inputs.beginning_cash)
    fixed_assets = round_currency(inputs.opening_fixed_assets)
    retained_earnings = round_currency(inputs.opening_retained_earnings)
    deferred_revenue = round_currency(inputs.opening_deferred_revenue)
    return BalancePosition(
        cash=cash,
        fixed_assets=fixed_assets,
        retained_earnings=retained_earnings,
        deferred_revenue=deferred_revenue,
        contributed_capital=round_currency(
            cash + fixed_assets - deferred_revenue - retained_earnings
        ),
    )


def build_year_statements(
    drivers: YearDrivers,
    opening: BalancePosition,
    anchor: BalancePosition,
    *,
    tax_rate: Decimal,
    interest_policy: InterestPolicy,
    tolerance: Decimal,
) -> YearStatements:
    """Compute one year's three statements from its drivers.

    Args:
        drivers: Normalized drivers for the year.
        opening: Position carried forward from the previous year.
        anchor: Position the interest policy is evaluated on when booking
            the year's charge.
        tax_rate: Flat tax rate applied to earnings before tax.
        interest_policy: Policy producing the circular interest charge.
        tolerance: Absolute tolerance for the balance check.

    Returns:
        YearStatements: P&L, balance sheet, cash flow, and closing position.
    """
    booked_interest = interest_charge(drivers, anchor, interest_policy)
    profit_loss = build_profit_loss(drivers, booked_interest, tax_rate)
    cash_flow = build_cash_flow(drivers, profit_loss, opening)
    closing = roll_forward(opening, drivers, profit_loss, cash_flow)
    settled_interest = interest_charge(drivers, closing, interest_policy)
    balance_sheet = build_balance_sheet(
        drivers.year,
        closing,
        suspense=round_currency(settled_interest - booked_interest),
        tolerance=tolerance,
    )
    return YearStatements(
        profit_loss=profit_loss,
        balance_sheet=balance_sheet,
        cash_flow=cash_flow,
        closing=closing,
    )


def interest_charge(
    drivers: YearDrivers,
    position: BalancePosition,
    interest_policy: InterestPolicy,
) -> Decimal:
    """Return external interest plus the policy charge on a position.

    Raises:
        InvalidInputError: If the policy yields a non-finite charge.
    """
    charge = interest_policy.charge(position)
    if not is_finite_number(charge):
        raise InvalidInputError(
            f"Interest policy returned a non-finite charge in "
            f"{drivers.year}: {charge!r}",
            year=drivers.year,
            field="interest",
        )
    return round_currency(drivers.interest + coerce_decimal(charge))


def build_profit_loss(
    drivers: YearDrivers,
    interest: Decimal,
    tax_rate: Decimal,
) -> ProfitLossStatement:
    gross_profit = round_currency(drivers.revenue - drivers.cogs)
    operating_expenses = round_currency(
        drivers.staff_costs + drivers.rent + drivers.opex
    )
    ebitda = round_currency(gross_profit - operating_expenses)
    ebit = round_currency(ebitda - drivers.depreciation)
    earnings_before_tax = round_currency(ebit - interest)
    taxes = round_currency(earnings_before_tax * tax_rate)
    net_income = round_currency(earnings_before_tax - taxes)
    return ProfitLossStatement(
        year=drivers.year,
        revenue=drivers.revenue,
        cogs=drivers.cogs,
        gross_profit=gross_profit,
        operating_expenses=operating_expenses,
        ebitda=ebitda,
        depreciation=drivers.depreciation,
        ebit=ebit,
        interest=interest,
        taxes=taxes,
        net_income=net_income,
    )


def build_cash_flow(
    drivers: YearDrivers,
    profit_loss: ProfitLossStatement,
    opening: BalancePosition,
) -> CashFlowStatement:
    # Deferred revenue collected ahead of recognition releases cash.
    working_capital_change = round_currency(
        drivers.deferred_revenue - opening.deferred_revenue
    )
    operating_cash_flow = round_currency(
        profit_loss.net_income
        + profit_loss.depreciation
        + working_capital_change
    )
    investing_cash_flow = round_currency(-drivers.capex)
    financing_cash_flow = drivers.financing
    net_cash_change = round_currency(
        operating_cash_flow + investing_cash_flow + financing_cash_flow
    )
    return CashFlowStatement(
        year=drivers.year,
        net_income=profit_loss.net_income,
        depreciation=profit_loss.depreciation,
        working_capital_change=working_capital_change,
        operating_cash_flow=operating_cash_flow,
        capex=drivers.capex,
        investing_cash_flow=investing_cash_flow,
        financing_cash_flow=financing_cash_flow,
        net_cash_change=net_cash_change,
        beginning_cash=opening.cash,
        ending_cash=round_currency(opening.cash + net_cash_change),
    )


def roll_forward(
    opening: BalancePosition,
    drivers: YearDrivers,
    profit_loss: ProfitLossStatement,
    cash_flow: CashFlowStatement,
) -> BalancePosition:
    """Return the closing position after applying one year of flows."""
    return BalancePosition(
        cash=cash_flow.ending_cash,
        fixed_assets=round_currency(
            opening.fixed_assets + drivers.capex - drivers.depreciation
        ),
        retained_earnings=round_currency(
            opening.retained_earnings + profit_loss.net_income
        ),
        deferred_revenue=drivers.deferred_revenue,
        contributed_capital=round_currency(
            opening.contributed_capital + drivers.financing
        ),
    )


def build_balance_sheet(
    year: int,
    closing: BalancePosition,
    *,
    suspense: Decimal,
    tolerance: Decimal,
) -> BalanceSheet:
    total_assets = round_currency(closing.cash + closing.fixed_assets)
    total_liabilities = round_currency(closing.deferred_revenue + suspense)
    total_equity = round_currency(
        closing.contributed_capital + closing.retained_earnings
    )
    total_liabilities_and_equity = round_currency(
        total_liabilities + total_equity
    )
    balance_difference = round_currency(
        total_assets - total_liabilities_and_equity
    )
    return BalanceSheet(
        year=year,
        cash=closing.cash,
        fixed_assets=closing.fixed_assets,
        total_assets=total_assets,
        deferred_revenue=closing.deferred_revenue,
        suspense=suspense,
        total_liabilities=total_liabilities,
        contributed_capital=closing.contributed_capital,
        retained_earnings=closing.retained_earnings,
        total_equity=total_equity,
        total_liabilities_and_equity=total_liabilities_and_equity,
        is_balanced=within_tolerance(balance_difference, tolerance),
        balance_difference=balance_difference,
    )


__all__ = [
    "opening_position",
    "build_year_statements",
    "interest_charge",
    "build_profit_loss",
    "build_cash_flow",
    "roll_forward",
    "build_balance_sheet",
]
