"""Tests for the composition root."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.generate_statements import (
    GenerateStatementsUseCase,
)
from src.domain.policies import CashInterestPolicy, NoInterestPolicy
from src.infrastructure import container
from src.infrastructure.assumptions_repository import (
    SqlAlchemyAssumptionsRepository,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.settings import ProjectionSettings
from src.infrastructure.statement_cache import InMemoryStatementCache


def test_build_database_adapter_returns_sqlalchemy_adapter() -> None:
    adapter = container.build_database_adapter()

    assert isinstance(adapter, SqlAlchemyDatabaseEngineAdapter)


def test_build_assumptions_repository_uses_given_port() -> None:
    repository = container.build_assumptions_repository(db_port=MagicMock())

    assert isinstance(repository, SqlAlchemyAssumptionsRepository)


def test_build_statement_cache_is_shared(monkeypatch) -> None:
    monkeypatch.setattr(container, "_statement_cache", None)

    first = container.build_statement_cache()
    second = container.build_statement_cache()

    assert isinstance(first, InMemoryStatementCache)
    assert first is second


def test_build_interest_policy_defaults_to_no_interest() -> None:
    policy = container.build_interest_policy(ProjectionSettings())

    assert isinstance(policy, NoInterestPolicy)


def test_build_interest_policy_uses_configured_rates() -> None:
    policy = container.build_interest_policy(
        ProjectionSettings(overdraft_rate=Decimal("0.05"))
    )

    assert isinstance(policy, CashInterestPolicy)
    assert policy.overdraft_rate == Decimal("0.05")
    assert policy.deposit_rate == Decimal("0")


def test_build_generate_statements_use_case_wires_settings(
    monkeypatch,
) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())
    repository = MagicMock()
    cache = InMemoryStatementCache()
    settings = ProjectionSettings(
        max_passes=4,
        cache_ttl_seconds=30,
        start_year=2030,
    )

    use_case = container.build_generate_statements_use_case(
        repository=repository,
        cache=cache,
        settings=settings,
    )

    assert isinstance(use_case, GenerateStatementsUseCase)
    assert use_case._repository is repository
    assert use_case._cache is cache
    assert use_case._max_passes == 4
    assert use_case._cache_ttl_seconds == 30
    assert use_case._start_year == 2030
