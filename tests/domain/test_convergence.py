"""Tests for the statement convergence driver."""

from decimal import Decimal
import logging
from unittest.mock import MagicMock

import pytest

from src.domain.constants import MODEL_START_YEAR
from src.domain.errors import InvalidInputError
from src.domain.models import (
    BalancePosition,
    ConvergenceStatus,
    StatementInputs,
)
from src.domain.policies import CashInterestPolicy
from src.domain.services import generate_financial_statements


def _single_year_inputs(**overrides) -> StatementInputs:
    values = {
        "revenue": [10_000_000],
        "staff_costs": [10_000_000],
        "rent": [5_000_000],
        "opex": [1_000_000],
        "capex": [0],
        "depreciation": [0],
        "beginning_cash": 0,
    }
    values.update(overrides)
    return StatementInputs(**values)


def _two_year_inputs(**overrides) -> StatementInputs:
    values = {
        "revenue": [10_000_000, 12_000_000],
        "staff_costs": [6_000_000, 6_000_000],
        "rent": [2_000_000, 2_000_000],
        "opex": [1_000_000, 1_000_000],
        "capex": [500_000, 0],
        "depreciation": [100_000, 100_000],
        "beginning_cash": 1_000_000,
    }
    values.update(overrides)
    return StatementInputs(**values)


class _DoublingCashPolicy:
    """Charges twice the closing cash, so the loop swings without settling."""

    def charge(self, position: BalancePosition) -> Decimal:
        return Decimal("2") * position.cash


def test_loss_making_year_balances_with_negative_cash() -> None:
    """A year of losses should still produce a balanced balance sheet."""
    result = generate_financial_statements(_single_year_inputs())

    profit_loss = result.profit_loss[0]
    balance_sheet = result.balance_sheet[0]
    cash_flow = result.cash_flow[0]
    assert profit_loss.year == MODEL_START_YEAR
    assert profit_loss.net_income == Decimal("-6000000.00")
    assert profit_loss.taxes == Decimal("0.00")
    assert cash_flow.ending_cash == Decimal("-6000000.00")
    assert balance_sheet.cash == Decimal("-6000000.00")
    assert balance_sheet.retained_earnings == Decimal("-6000000.00")
    assert balance_sheet.total_assets == Decimal("-6000000.00")
    assert balance_sheet.total_liabilities_and_equity == Decimal(
        "-6000000.00"
    )
    assert balance_sheet.is_balanced is True
    assert balance_sheet.balance_difference == Decimal("0.00")
    assert result.convergence.balanced is True
    assert result.convergence.passes == 1
    assert result.convergence.status is ConvergenceStatus.CONVERGED


def test_two_year_horizon_carries_cash_and_balances_forward() -> None:
    """Year two should open exactly where year one closed."""
    result = generate_financial_statements(_two_year_inputs())

    first, second = result.cash_flow
    assert first.beginning_cash == Decimal("1000000.00")
    assert first.ending_cash == Decimal("1500000.00")
    assert second.beginning_cash == first.ending_cash
    assert second.ending_cash == Decimal("4500000.00")
    assert first.investing_cash_flow == Decimal("-500000.00")
    assert second.investing_cash_flow == Decimal("0.00")

    assert [bs.fixed_assets for bs in result.balance_sheet] == [
        Decimal("400000.00"),
        Decimal("300000.00"),
    ]
    assert [bs.retained_earnings for bs in result.balance_sheet] == [
        Decimal("900000.00"),
        Decimal("3800000.00"),
    ]
    assert all(bs.is_balanced for bs in result.balance_sheet)
    assert result.years == (MODEL_START_YEAR, MODEL_START_YEAR + 1)


def test_cash_continuity_holds_with_interest_iterations() -> None:
    """Continuity is exact regardless of how many passes ran."""
    inputs = _two_year_inputs(beginning_cash=-3_000_000)

    result = generate_financial_statements(
        inputs,
        interest_policy=CashInterestPolicy(
            deposit_rate="0.01",
            overdraft_rate="0.08",
        ),
    )

    assert result.convergence.passes > 1
    for previous, current in zip(result.cash_flow, result.cash_flow[1:]):
        assert current.beginning_cash == previous.ending_cash


def test_fixed_assets_roll_forward_without_clamping() -> None:
    """Depreciation beyond the asset base should drive assets negative."""
    inputs = _two_year_inputs(
        capex=[100_000, 0],
        depreciation=[50_000, 200_000],
        opening_fixed_assets=25_000,
    )

    result = generate_financial_statements(inputs)

    assert [bs.fixed_assets for bs in result.balance_sheet] == [
        Decimal("75000.00"),
        Decimal("-125000.00"),
    ]
    assert result.convergence.balanced is True


def test_overdraft_interest_converges_to_fixed_point() -> None:
    """Interest on overdrawn cash should settle after a few passes."""
    result = generate_financial_statements(
        _single_year_inputs(),
        interest_policy=CashInterestPolicy(overdraft_rate="0.05"),
    )

    assert result.convergence.status is ConvergenceStatus.CONVERGED
    assert result.convergence.passes == 7
    assert result.profit_loss[0].interest == Decimal("315789.47")
    assert result.cash_flow[0].ending_cash == Decimal("-6315789.47")
    assert result.balance_sheet[0].suspense == Decimal("0.00")
    assert result.balance_sheet[0].is_balanced is True


def test_pass_cap_reports_non_convergence_without_raising(caplog) -> None:
    """A swinging circular charge should exhaust the cap and still return."""
    with caplog.at_level(logging.WARNING):
        result = generate_financial_statements(
            _single_year_inputs(),
            max_passes=5,
            interest_policy=_DoublingCashPolicy(),
        )

    report = result.convergence
    assert report.passes == 5
    assert report.balanced is False
    assert report.status is ConvergenceStatus.EXHAUSTED
    assert report.max_balance_difference > report.tolerance
    assert len(result.profit_loss) == 1
    assert len(result.balance_sheet) == 1
    assert len(result.cash_flow) == 1
    assert result.balance_sheet[0].is_balanced is False
    assert "did not balance after 5 passes" in caplog.text


def test_unbalanced_sheet_difference_mirrors_suspense() -> None:
    """The balance difference exposes the unsettled circular charge."""
    result = generate_financial_statements(
        _single_year_inputs(),
        max_passes=1,
        interest_policy=CashInterestPolicy(overdraft_rate="0.05"),
    )

    balance_sheet = result.balance_sheet[0]
    assert balance_sheet.suspense == Decimal("300000.00")
    assert balance_sheet.balance_difference == Decimal("-300000.00")
    assert result.convergence.passes == 1
    assert result.convergence.balanced is False


def test_generation_is_deterministic() -> None:
    """Identical inputs should produce identical outputs."""
    inputs = _two_year_inputs(tax_rate="0.2", deferred_revenue=[10, 20])
    policy = CashInterestPolicy(deposit_rate="0.03")

    first = generate_financial_statements(inputs, interest_policy=policy)
    second = generate_financial_statements(inputs, interest_policy=policy)

    assert first == second


def test_optional_drivers_flow_through_all_statements() -> None:
    """COGS, taxes, deferred revenue and financing should stay balanced."""
    inputs = _two_year_inputs(
        cogs=[1_000_000, 1_000_000],
        deferred_revenue=[200_000, 250_000],
        financing=[1_000_000, -250_000],
        tax_rate="0.2",
    )

    result = generate_financial_statements(inputs)

    first_pl = result.profit_loss[0]
    assert first_pl.gross_profit == Decimal("9000000.00")
    assert first_pl.ebit == Decimal("-100000.00")
    assert first_pl.taxes == Decimal("-20000.00")
    assert first_pl.net_income == Decimal("-80000.00")

    first_cf, second_cf = result.cash_flow
    assert first_cf.working_capital_change == Decimal("200000.00")
    assert second_cf.working_capital_change == Decimal("50000.00")
    assert first_cf.financing_cash_flow == Decimal("1000000.00")
    assert second_cf.financing_cash_flow == Decimal("-250000.00")

    first_bs, second_bs = result.balance_sheet
    assert first_bs.contributed_capital == Decimal("2000000.00")
    assert second_bs.contributed_capital == Decimal("1750000.00")
    assert second_bs.deferred_revenue == Decimal("250000.00")
    assert result.convergence.balanced is True


def test_opening_balances_seed_contributed_capital() -> None:
    """Contributed capital should absorb the unfunded opening position."""
    inputs = _single_year_inputs(
        beginning_cash=500_000,
        opening_fixed_assets=300_000,
        opening_retained_earnings=100_000,
        opening_deferred_revenue=50_000,
        deferred_revenue=[50_000],
    )

    result = generate_financial_statements(inputs)

    balance_sheet = result.balance_sheet[0]
    assert balance_sheet.contributed_capital == Decimal("650000.00")
    assert result.cash_flow[0].working_capital_change == Decimal("0.00")
    assert balance_sheet.is_balanced is True


def test_start_year_labels_records() -> None:
    result = generate_financial_statements(
        _two_year_inputs(),
        start_year=2030,
    )

    assert result.years == (2030, 2031)
    assert [bs.year for bs in result.balance_sheet] == [2030, 2031]
    assert [cf.year for cf in result.cash_flow] == [2030, 2031]


def test_pass_traces_are_logged_at_debug() -> None:
    logger = MagicMock()

    generate_financial_statements(_single_year_inputs(), logger=logger)

    logger.debug.assert_called_once()
    assert "Pass 1" in logger.debug.call_args.args[0]
    logger.warning.assert_not_called()


@pytest.mark.parametrize("max_passes", [0, -1, 2.5, True])
def test_invalid_pass_cap_is_rejected(max_passes) -> None:
    with pytest.raises(InvalidInputError) as exc_info:
        generate_financial_statements(
            _single_year_inputs(),
            max_passes=max_passes,
        )

    assert exc_info.value.field == "max_passes"


@pytest.mark.parametrize("tolerance", ["-0.01", "NaN", "abc"])
def test_invalid_tolerance_is_rejected(tolerance) -> None:
    with pytest.raises(InvalidInputError) as exc_info:
        generate_financial_statements(
            _single_year_inputs(),
            tolerance=tolerance,
        )

    assert exc_info.value.field == "tolerance"


def test_wider_tolerance_stops_earlier() -> None:
    """A looser tolerance should accept an earlier pass."""
    result = generate_financial_statements(
        _single_year_inputs(),
        tolerance="2",
        interest_policy=CashInterestPolicy(overdraft_rate="0.05"),
    )

    assert result.convergence.passes == 5
    assert result.convergence.tolerance == Decimal("2")
    assert result.convergence.balanced is True


def test_large_tax_products_are_rounded_to_cents() -> None:
    amount = Decimal("900000000000000")
    inputs = _single_year_inputs(
        revenue=[amount],
        staff_costs=[0],
        rent=[0],
        opex=[0],
        tax_rate=amount,
    )

    result = generate_financial_statements(inputs)

    profit_loss = result.profit_loss[0]
    assert profit_loss.taxes == Decimal("810000000000000000000000000000.00")
    assert profit_loss.net_income == amount - profit_loss.taxes
    assert result.convergence.balanced
