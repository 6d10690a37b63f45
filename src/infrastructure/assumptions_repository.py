"""SQLAlchemy-backed repository for projection assumptions."""

from datetime import datetime

from sqlalchemy import text

from src.application.ports.assumptions_repository import (
    AssumptionsRepositoryPort,
    ScenarioNotFoundError,
    ScenarioRecord,
)
from src.application.ports.database import DatabaseEnginePort
from src.domain.constants import OPTIONAL_DRIVERS, REQUIRED_DRIVERS
from src.domain.errors import InvalidInputError
from src.domain.models import StatementInputs
from src.utils.decimal_utils import coerce_decimal

DRIVER_COLUMNS = REQUIRED_DRIVERS + OPTIONAL_DRIVERS


class SqlAlchemyAssumptionsRepository(AssumptionsRepositoryPort):
    """Repository reading scenarios and per-year drivers with SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the projection engine.
        """
        self._db_port = db_port

    def fetch_scenario(self, scenario_id: str) -> ScenarioRecord:
        row = self._fetch_scenario_row(scenario_id)
        return ScenarioRecord(
            scenario_id=row.id,
            updated_at=self._parse_timestamp(row.updated_at),
        )

    def fetch_statement_inputs(self, scenario_id: str) -> StatementInputs:
        """Return the drivers of a scenario ordered by year.

        Args:
            scenario_id: Scenario identifier.

        Returns:
            StatementInputs: Horizon-aligned drivers and opening balances.

        Raises:
            ScenarioNotFoundError: If the scenario does not exist.
            InvalidInputError: If the stored years are not contiguous.
        """
        scenario = self._fetch_scenario_row(scenario_id)
        query = text(
            f"""
            SELECT year, {", ".join(DRIVER_COLUMNS)}
            FROM projection_drivers
            WHERE scenario_id = :scenario_id
            ORDER BY year
            """
        )
        engine = self._db_port.get_projection_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"scenario_id": scenario_id}).all()
        self._check_contiguous_years(scenario_id, [row.year for row in rows])

        series = {
            column: tuple(
                coerce_decimal(getattr(row, column)) for row in rows
            )
            for column in DRIVER_COLUMNS
        }
        return StatementInputs(
            beginning_cash=coerce_decimal(scenario.beginning_cash),
            tax_rate=coerce_decimal(scenario.tax_rate),
            opening_fixed_assets=coerce_decimal(
                scenario.opening_fixed_assets
            ),
            opening_retained_earnings=coerce_decimal(
                scenario.opening_retained_earnings
            ),
            opening_deferred_revenue=coerce_decimal(
                scenario.opening_deferred_revenue
            ),
            **series,
        )

    def _fetch_scenario_row(self, scenario_id: str):
        query = text(
            """
            SELECT id, updated_at, beginning_cash, tax_rate,
                   opening_fixed_assets, opening_retained_earnings,
                   opening_deferred_revenue
            FROM projection_scenarios
            WHERE id = :scenario_id
            """
        )
        engine = self._db_port.get_projection_engine()
        with engine.connect() as conn:
            row = conn.execute(query, {"scenario_id": scenario_id}).first()
        if row is None:
            raise ScenarioNotFoundError(f"Unknown scenario: {scenario_id}")
        return row

    @staticmethod
    def _check_contiguous_years(scenario_id: str, years: list[int]) -> None:
        if not years:
            raise InvalidInputError(
                f"Scenario {scenario_id} has no driver rows",
                field="year",
            )
        for previous, current in zip(years, years[1:]):
            if current != previous + 1:
                raise InvalidInputError(
                    f"Scenario {scenario_id} skips from year {previous} "
                    f"to {current}",
                    year=current,
                    field="year",
                )

    @staticmethod
    def _parse_timestamp(value) -> datetime:
        # SQLite hands timestamps back as ISO strings.
        if isinstance(value, str):
            return datetime.fromisoformat(value)
        return value


__all__ = ["SqlAlchemyAssumptionsRepository", "DRIVER_COLUMNS"]
