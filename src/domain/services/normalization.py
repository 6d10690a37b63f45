"""Domain normalization helpers for driver series."""

from decimal import Decimal
from typing import Sequence

from src.domain.constants import OPTIONAL_DRIVERS, REQUIRED_DRIVERS
from src.domain.models.statements import StatementInputs, YearDrivers
from src.utils.decimal_utils import round_currency


def normalize_series(values: Sequence, horizon: int) -> tuple[Decimal, ...]:
    """Normalize a driver series to cent-rounded Decimals.

    Args:
        values: Raw numeric values; an empty series means all zeros.
        horizon: Number of modeled years.

    Returns:
        tuple[Decimal, ...]: One rounded amount per year.
    """
    if not values:
        return tuple(Decimal("0.00") for _ in range(horizon))
    return tuple(round_currency(value) for value in values)


def build_year_drivers(
    inputs: StatementInputs,
    start_year: int,
) -> list[YearDrivers]:
    """Split validated inputs into per-year driver rows.

    Args:
        inputs: Validated statement inputs.
        start_year: Calendar year of the first modeled year.

    Returns:
        list[YearDrivers]: Drivers ordered by year.
    """
    horizon = inputs.horizon
    series = {
        name: normalize_series(getattr(inputs, name), horizon)
        for name in (*REQUIRED_DRIVERS, *OPTIONAL_DRIVERS)
    }
    return [
        YearDrivers(
            year=start_year + index,
            **{name: values[index] for name, values in series.items()},
        )
        for index in range(horizon)
    ]


__all__ = ["normalize_series", "build_year_drivers"]
