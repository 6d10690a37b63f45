"""Use case to generate a scenario's three-statement projection."""

from datetime import datetime, timedelta, timezone

from src.application.ports.assumptions_repository import (
    AssumptionsRepositoryPort,
)
from src.application.ports.statement_cache import StatementCachePort
from src.domain.constants import (
    BALANCE_TOLERANCE,
    DEFAULT_MAX_PASSES,
    MODEL_START_YEAR,
)
from src.domain.models import FinancialStatements
from src.domain.policies import InterestPolicy
from src.domain.services import generate_financial_statements
from src.infrastructure.logging.logger import get_app_logger

DEFAULT_CACHE_TTL_SECONDS = 300
CACHE_KEY_PREFIX = "statements"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def statements_cache_key(scenario_id: str, updated_at: datetime) -> str:
    """Return the cache key for a scenario at a given modification time.

    Args:
        scenario_id: Scenario identifier.
        updated_at: Last modification timestamp of the scenario.

    Returns:
        str: Key of the form ``statements:<id>:<epoch ms>``.
    """
    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    epoch_ms = (updated_at - EPOCH) // timedelta(milliseconds=1)
    return f"{CACHE_KEY_PREFIX}:{scenario_id}:{epoch_ms}"


def _scenario_prefix(scenario_id: str) -> str:
    return f"{CACHE_KEY_PREFIX}:{scenario_id}:"


class GenerateStatementsUseCase:
    """Generate, cache and return statements for a scenario."""

    def __init__(
        self,
        assumptions_repository: AssumptionsRepositoryPort,
        cache: StatementCachePort | None = None,
        logger=None,
        max_passes: int = DEFAULT_MAX_PASSES,
        tolerance=BALANCE_TOLERANCE,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        interest_policy: InterestPolicy | None = None,
        start_year: int = MODEL_START_YEAR,
    ) -> None:
        """Initialize the use case.

        Args:
            assumptions_repository: Repository providing scenario drivers.
            cache: Optional cache for generated statements.
            logger: Optional logger compatible with logging.Logger-like API.
            max_passes: Pass cap for the convergence loop.
            tolerance: Absolute tolerance for the balance check.
            cache_ttl_seconds: Lifetime of cached statements.
            interest_policy: Optional circular interest policy.
            start_year: Calendar year of the first modeled year.
        """
        self._repository = assumptions_repository
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._max_passes = max_passes
        self._tolerance = tolerance
        self._cache_ttl_seconds = cache_ttl_seconds
        self._interest_policy = interest_policy
        self._start_year = start_year

    def execute(self, scenario_id: str) -> FinancialStatements:
        """Return the statements for a scenario.

        Args:
            scenario_id: Scenario identifier.

        Returns:
            FinancialStatements: Cached or freshly generated statements.

        Raises:
            ScenarioNotFoundError: If the scenario does not exist.
            InvalidInputError: If the stored drivers are malformed.
        """
        scenario = self._repository.fetch_scenario(scenario_id)
        key = statements_cache_key(scenario.scenario_id, scenario.updated_at)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                self._logger.info(f"Statements cache hit for {key}")
                return cached

        inputs = self._repository.fetch_statement_inputs(scenario_id)
        self._logger.info(
            f"Generating statements for scenario {scenario_id} "
            f"over {inputs.horizon} years"
        )
        statements = generate_financial_statements(
            inputs,
            max_passes=self._max_passes,
            tolerance=self._tolerance,
            interest_policy=self._interest_policy,
            start_year=self._start_year,
            logger=self._logger,
        )
        report = statements.convergence
        if not report.balanced:
            self._logger.warning(
                f"Scenario {scenario_id} did not balance after "
                f"{report.passes} passes "
                f"(max_difference={report.max_balance_difference})"
            )

        if self._cache is not None:
            # Only the newest version of a scenario stays cached.
            self._cache.invalidate_prefix(_scenario_prefix(scenario_id))
            self._cache.set(key, statements, self._cache_ttl_seconds)
        return statements

    def invalidate(self, scenario_id: str) -> int:
        """Drop every cached entry of a scenario.

        Args:
            scenario_id: Scenario identifier.

        Returns:
            int: Number of cache entries removed.
        """
        if self._cache is None:
            return 0
        removed = self._cache.invalidate_prefix(
            _scenario_prefix(scenario_id)
        )
        self._logger.info(
            f"Invalidated {removed} cached statements for {scenario_id}"
        )
        return removed
