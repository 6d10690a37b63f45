"""Convergence driver producing a balanced three-statement projection.

The driver rebuilds the whole horizon until every balance sheet balances or
the pass cap is reached. Circular charges (interest policies) are booked from
the previous pass's closing positions; a pass balances once re-evaluating
them on its own closing positions changes nothing.

States: INITIALIZING -> ITERATING -> CONVERGED | EXHAUSTED. Exhaustion is not
an error: the last pass is returned with ``balanced=False``.
"""

from decimal import Decimal, localcontext
import logging
from logging import Logger
from typing import Sequence

from src.domain.constants import (
    BALANCE_TOLERANCE,
    DECIMAL_PRECISION,
    DEFAULT_MAX_PASSES,
    MODEL_START_YEAR,
)
from src.domain.errors import InvalidInputError
from src.domain.models.statements import (
    BalancePosition,
    ConvergenceReport,
    ConvergenceStatus,
    FinancialStatements,
    StatementInputs,
    YearDrivers,
    YearStatements,
)
from src.domain.policies.interest import InterestPolicy, NoInterestPolicy
from src.domain.services.normalization import build_year_drivers
from src.domain.services.statement_builder import (
    build_year_statements,
    opening_position,
)
from src.domain.services.validation import validate_statement_inputs
from src.utils.decimal_utils import coerce_decimal, is_finite_number


def generate_financial_statements(
    inputs: StatementInputs,
    *,
    max_passes: int = DEFAULT_MAX_PASSES,
    tolerance=BALANCE_TOLERANCE,
    interest_policy: InterestPolicy | None = None,
    start_year: int = MODEL_START_YEAR,
    logger: Logger | None = None,
) -> FinancialStatements:
    """Generate P&L, balance sheet, and cash flow statements.

    Args:
        inputs: Driver series and opening balances.
        max_passes: Maximum number of full-horizon passes.
        tolerance: Absolute tolerance for the balance check.
        interest_policy: Optional circular interest policy.
        start_year: Calendar year of the first modeled year.
        logger: Logger used for pass tracing and warnings.

    Returns:
        FinancialStatements: Statements from the last pass and the report.

    Raises:
        InvalidInputError: If inputs or iteration settings are malformed.
    """
    log = logger or logging.getLogger(__name__)
    status = ConvergenceStatus.INITIALIZING

    if (
        isinstance(max_passes, bool)
        or not isinstance(max_passes, int)
        or max_passes < 1
    ):
        raise InvalidInputError(
            f"max_passes must be a positive integer, got {max_passes!r}",
            field="max_passes",
        )
    if not is_finite_number(tolerance) or coerce_decimal(tolerance) < 0:
        raise InvalidInputError(
            "tolerance must be a finite non-negative number, "
            f"got {tolerance!r}",
            field="tolerance",
        )
    validate_statement_inputs(inputs, start_year=start_year, logger=log)

    with localcontext() as context:
        context.prec = DECIMAL_PRECISION
        return _converge(
            inputs,
            max_passes=max_passes,
            tolerance=coerce_decimal(tolerance),
            interest_policy=interest_policy or NoInterestPolicy(),
            start_year=start_year,
            log=log,
        )


def _converge(
    inputs: StatementInputs,
    *,
    max_passes: int,
    tolerance: Decimal,
    interest_policy: InterestPolicy,
    start_year: int,
    log,
) -> FinancialStatements:
    drivers = build_year_drivers(inputs, start_year)
    opening = opening_position(inputs)
    tax_rate = coerce_decimal(inputs.tax_rate)

    status = ConvergenceStatus.ITERATING
    anchors: list[BalancePosition] | None = None
    passes = 0
    while True:
        passes += 1
        years = _build_pass(
            drivers,
            opening,
            anchors,
            tax_rate=tax_rate,
            interest_policy=interest_policy,
            tolerance=tolerance,
        )
        max_difference = _max_balance_difference(years)
        balanced = all(year.balance_sheet.is_balanced for year in years)
        log.debug(
            f"Pass {passes}: balanced={balanced}, "
            f"max_difference={max_difference}"
        )
        if balanced:
            status = ConvergenceStatus.CONVERGED
            break
        if passes >= max_passes:
            status = ConvergenceStatus.EXHAUSTED
            break
        anchors = [year.closing for year in years]

    if status is ConvergenceStatus.EXHAUSTED:
        log.warning(
            f"Statements did not balance after {passes} passes "
            f"(max_difference={max_difference}, tolerance={tolerance})"
        )

    return FinancialStatements(
        profit_loss=tuple(year.profit_loss for year in years),
        balance_sheet=tuple(year.balance_sheet for year in years),
        cash_flow=tuple(year.cash_flow for year in years),
        convergence=ConvergenceReport(
            passes=passes,
            balanced=balanced,
            tolerance=tolerance,
            status=status,
            max_balance_difference=max_difference,
        ),
    )


def _build_pass(
    drivers: Sequence[YearDrivers],
    opening: BalancePosition,
    anchors: Sequence[BalancePosition] | None,
    *,
    tax_rate: Decimal,
    interest_policy: InterestPolicy,
    tolerance: Decimal,
) -> list[YearStatements]:
    """Build every year once, carrying closing balances forward.

    Without anchors (first pass) each year's circular charge is evaluated on
    its own opening position.
    """
    years: list[YearStatements] = []
    position = opening
    for index, year_drivers in enumerate(drivers):
        anchor = anchors[index] if anchors is not None else position
        statements = build_year_statements(
            year_drivers,
            position,
            anchor,
            tax_rate=tax_rate,
            interest_policy=interest_policy,
            tolerance=tolerance,
        )
        years.append(statements)
        position = statements.closing
    return years


def _max_balance_difference(years: Sequence[YearStatements]) -> Decimal:
    return max(
        (abs(year.balance_sheet.balance_difference) for year in years),
        default=Decimal("0.00"),
    )


__all__ = ["generate_financial_statements"]
