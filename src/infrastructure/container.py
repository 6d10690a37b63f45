"""Composition root for wiring infrastructure adapters."""

from src.application.ports.assumptions_repository import (
    AssumptionsRepositoryPort,
)
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.statement_cache import StatementCachePort
from src.application.use_cases.generate_statements import (
    GenerateStatementsUseCase,
)
from src.domain.policies import (
    CashInterestPolicy,
    InterestPolicy,
    NoInterestPolicy,
)
from src.infrastructure.assumptions_repository import (
    SqlAlchemyAssumptionsRepository,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ProjectionSettings
from src.infrastructure.statement_cache import InMemoryStatementCache

_statement_cache: InMemoryStatementCache | None = None


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_assumptions_repository(
    db_port: DatabaseEnginePort | None = None,
) -> AssumptionsRepositoryPort:
    """Return the SQLAlchemy assumptions repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyAssumptionsRepository(resolved_db)


def build_statement_cache() -> StatementCachePort:
    """Return the process-wide statement cache."""
    global _statement_cache
    if _statement_cache is None:
        _statement_cache = InMemoryStatementCache()
    return _statement_cache


def build_interest_policy(
    settings: ProjectionSettings | None = None,
) -> InterestPolicy:
    """Return the interest policy configured by deposit/overdraft rates."""
    resolved = settings or ProjectionSettings.from_env()
    if resolved.deposit_rate == 0 and resolved.overdraft_rate == 0:
        return NoInterestPolicy()
    return CashInterestPolicy(
        deposit_rate=resolved.deposit_rate,
        overdraft_rate=resolved.overdraft_rate,
    )


def build_generate_statements_use_case(
    repository: AssumptionsRepositoryPort | None = None,
    cache: StatementCachePort | None = None,
    settings: ProjectionSettings | None = None,
) -> GenerateStatementsUseCase:
    """Return the generate-statements use case wired from settings."""
    resolved = settings or ProjectionSettings.from_env()
    return GenerateStatementsUseCase(
        assumptions_repository=(
            repository
            if repository is not None
            else build_assumptions_repository()
        ),
        cache=cache if cache is not None else build_statement_cache(),
        logger=get_app_logger(),
        max_passes=resolved.max_passes,
        tolerance=resolved.balance_tolerance,
        cache_ttl_seconds=resolved.cache_ttl_seconds,
        interest_policy=build_interest_policy(resolved),
        start_year=resolved.start_year,
    )


__all__ = [
    "build_database_adapter",
    "build_assumptions_repository",
    "build_statement_cache",
    "build_interest_policy",
    "build_generate_statements_use_case",
]
