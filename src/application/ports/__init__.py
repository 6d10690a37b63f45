"""Application ports package."""

from .assumptions_repository import (
    AssumptionsRepositoryPort,
    ScenarioNotFoundError,
    ScenarioRecord,
)
from .database import DatabaseEnginePort
from .statement_cache import StatementCachePort

__all__ = [
    "AssumptionsRepositoryPort",
    "ScenarioNotFoundError",
    "ScenarioRecord",
    "DatabaseEnginePort",
    "StatementCachePort",
]
