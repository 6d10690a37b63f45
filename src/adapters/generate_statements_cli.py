"""CLI adapter to generate statements for a projection scenario."""

import json
import os

from src.adapters.statements_payload import build_statements_payload
from src.application.ports.assumptions_repository import ScenarioNotFoundError
from src.domain.errors import InvalidInputError, UndefinedRatioError
from src.domain.models import FinancialStatements
from src.domain.services import ebitda_margin
from src.infrastructure.container import build_generate_statements_use_case
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


def _format_margin(statement) -> str:
    try:
        return f"{ebitda_margin(statement):.2%}"
    except UndefinedRatioError:
        return "n/a"


def _print_summary(scenario_id: str, statements: FinancialStatements) -> None:
    report = statements.convergence
    print(
        f"Statements for scenario {scenario_id} "
        f"({statements.years[0]}-{statements.years[-1]})"
    )
    rows = zip(
        statements.profit_loss,
        statements.balance_sheet,
        statements.cash_flow,
    )
    for profit_loss, balance_sheet, cash_flow in rows:
        print(
            f"{profit_loss.year}: net_income={profit_loss.net_income}, "
            f"ending_cash={cash_flow.ending_cash}, "
            f"ebitda_margin={_format_margin(profit_loss)}, "
            f"balanced={balance_sheet.is_balanced}"
        )
    if report.balanced:
        print(f"Converged after {report.passes} passes.")
    else:
        print(
            f"WARNING: statements did not balance after {report.passes} "
            f"passes (max difference {report.max_balance_difference})."
        )


def main() -> None:
    """Generate and print statements for the scenario in SCENARIO_ID."""
    logger = get_app_logger()
    scenario_id = os.getenv("SCENARIO_ID", "").strip()
    if not scenario_id:
        logger.warning("SCENARIO_ID is required to generate statements.")
        return

    use_case = build_generate_statements_use_case()
    try:
        statements = use_case.execute(scenario_id)
    except (ScenarioNotFoundError, InvalidInputError) as exc:
        logger.error(str(exc))
        return

    get_usage_logger().info(
        f"generate_statements scenario={scenario_id} "
        f"passes={statements.convergence.passes} "
        f"balanced={statements.convergence.balanced}"
    )
    output = os.getenv("STATEMENTS_OUTPUT", "summary").strip().lower()
    if output == "json":
        print(json.dumps(build_statements_payload(statements), indent=2))
        return
    _print_summary(scenario_id, statements)


if __name__ == "__main__":  # pragma: no cover
    main()
