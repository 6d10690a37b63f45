"""Settings helpers for the projection engine."""

from dataclasses import dataclass
from decimal import Decimal
import os

from src.application.use_cases.generate_statements import (
    DEFAULT_CACHE_TTL_SECONDS,
)
from src.domain.constants import (
    BALANCE_TOLERANCE,
    DEFAULT_MAX_PASSES,
    MODEL_START_YEAR,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal, is_finite_number


@dataclass(frozen=True)
class ProjectionSettings:
    """Settings for running projections.

    Attributes:
        max_passes: Pass cap for the convergence loop.
        balance_tolerance: Absolute tolerance for the balance check.
        cache_ttl_seconds: Lifetime of cached statements.
        start_year: Calendar year of the first modeled year.
        deposit_rate: Rate credited on positive cash balances.
        overdraft_rate: Rate charged on negative cash balances.
    """

    max_passes: int = DEFAULT_MAX_PASSES
    balance_tolerance: Decimal = BALANCE_TOLERANCE
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    start_year: int = MODEL_START_YEAR
    deposit_rate: Decimal = Decimal("0")
    overdraft_rate: Decimal = Decimal("0")

    @classmethod
    def from_env(cls) -> "ProjectionSettings":
        """Build settings from environment variables.

        Invalid values are logged and replaced by defaults.

        Returns:
            ProjectionSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        return cls(
            max_passes=cls._read_int(
                "PROJECTION_MAX_PASSES",
                DEFAULT_MAX_PASSES,
                minimum=1,
                logger=logger,
            ),
            balance_tolerance=cls._read_decimal(
                "PROJECTION_BALANCE_TOLERANCE",
                BALANCE_TOLERANCE,
                logger=logger,
            ),
            cache_ttl_seconds=cls._read_int(
                "STATEMENTS_CACHE_TTL",
                DEFAULT_CACHE_TTL_SECONDS,
                minimum=1,
                logger=logger,
            ),
            start_year=cls._read_int(
                "MODEL_START_YEAR",
                MODEL_START_YEAR,
                minimum=1,
                logger=logger,
            ),
            deposit_rate=cls._read_decimal(
                "PROJECTION_DEPOSIT_RATE",
                Decimal("0"),
                logger=logger,
            ),
            overdraft_rate=cls._read_decimal(
                "PROJECTION_OVERDRAFT_RATE",
                Decimal("0"),
                logger=logger,
            ),
        )

    @staticmethod
    def _read_int(name: str, default: int, minimum: int, logger) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer {name}={raw!r}")
            return default
        if value < minimum:
            logger.warning(f"Ignoring {name}={value} below {minimum}")
            return default
        return value

    @staticmethod
    def _read_decimal(name: str, default: Decimal, logger) -> Decimal:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        if not is_finite_number(raw.strip()):
            logger.warning(f"Ignoring non-numeric {name}={raw!r}")
            return default
        value = coerce_decimal(raw.strip())
        if value < 0:
            logger.warning(f"Ignoring negative {name}={value}")
            return default
        return value


__all__ = ["ProjectionSettings"]
