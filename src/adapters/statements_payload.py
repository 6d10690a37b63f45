"""Response shaping for generated statements."""

from decimal import Decimal

from src.domain.models import (
    BalanceSheet,
    CashFlowStatement,
    FinancialStatements,
    ProfitLossStatement,
)

STATUS_OK = "OK"
STATUS_FAILED = "FAILED"


def _amount(value: Decimal) -> float:
    return float(value)


def _profit_loss_record(statement: ProfitLossStatement) -> dict:
    return {
        "revenue": _amount(statement.revenue),
        "cogs": _amount(statement.cogs),
        "grossProfit": _amount(statement.gross_profit),
        "operatingExpenses": _amount(statement.operating_expenses),
        "ebitda": _amount(statement.ebitda),
        "depreciation": _amount(statement.depreciation),
        "ebit": _amount(statement.ebit),
        "interest": _amount(statement.interest),
        "taxes": _amount(statement.taxes),
        "netIncome": _amount(statement.net_income),
    }


def _balance_sheet_record(statement: BalanceSheet) -> dict:
    return {
        "cash": _amount(statement.cash),
        "fixedAssets": _amount(statement.fixed_assets),
        "totalAssets": _amount(statement.total_assets),
        "deferredRevenue": _amount(statement.deferred_revenue),
        "suspense": _amount(statement.suspense),
        "totalLiabilities": _amount(statement.total_liabilities),
        "contributedCapital": _amount(statement.contributed_capital),
        "retainedEarnings": _amount(statement.retained_earnings),
        "totalEquity": _amount(statement.total_equity),
        "totalLiabilitiesAndEquity": _amount(
            statement.total_liabilities_and_equity
        ),
        "isBalanced": statement.is_balanced,
        "balanceDifference": _amount(statement.balance_difference),
    }


def _cash_flow_record(statement: CashFlowStatement) -> dict:
    return {
        "netIncome": _amount(statement.net_income),
        "depreciation": _amount(statement.depreciation),
        "workingCapitalChange": _amount(statement.working_capital_change),
        "operatingCashFlow": _amount(statement.operating_cash_flow),
        "capex": _amount(statement.capex),
        "investingCashFlow": _amount(statement.investing_cash_flow),
        "financingCashFlow": _amount(statement.financing_cash_flow),
        "netCashChange": _amount(statement.net_cash_change),
        "beginningCash": _amount(statement.beginning_cash),
        "endingCash": _amount(statement.ending_cash),
    }


def build_statements_payload(statements: FinancialStatements) -> dict:
    """Shape statements into the year-keyed response payload.

    Args:
        statements: Generated statements with their convergence report.

    Returns:
        dict: JSON-serializable payload with ``convergence`` and
        ``statements`` (``PL``, ``BS``, ``CF`` keyed by year).
    """
    report = statements.convergence
    return {
        "convergence": {
            "passes": report.passes,
            "tolerance": _amount(report.tolerance),
            "status": STATUS_OK if report.balanced else STATUS_FAILED,
        },
        "statements": {
            "PL": {
                str(item.year): _profit_loss_record(item)
                for item in statements.profit_loss
            },
            "BS": {
                str(item.year): _balance_sheet_record(item)
                for item in statements.balance_sheet
            },
            "CF": {
                str(item.year): _cash_flow_record(item)
                for item in statements.cash_flow
            },
        },
    }


__all__ = ["build_statements_payload", "STATUS_OK", "STATUS_FAILED"]
