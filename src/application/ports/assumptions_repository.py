"""Port for reading projection assumptions."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from src.domain.models import StatementInputs


class ScenarioNotFoundError(LookupError):
    """Raised when a scenario id is unknown to the repository."""


@dataclass(frozen=True)
class ScenarioRecord:
    """Identity and freshness of a projection scenario."""

    scenario_id: str
    updated_at: datetime


class AssumptionsRepositoryPort(Protocol):
    """Port exposing the driver arrays of a projection scenario."""

    def fetch_scenario(self, scenario_id: str) -> ScenarioRecord:
        """Return the scenario identity and last-modified timestamp."""

    def fetch_statement_inputs(self, scenario_id: str) -> StatementInputs:
        """Return the horizon-aligned drivers for the scenario."""


__all__ = [
    "AssumptionsRepositoryPort",
    "ScenarioNotFoundError",
    "ScenarioRecord",
]
