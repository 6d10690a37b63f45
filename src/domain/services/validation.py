"""Domain validation helpers for statement inputs."""

from logging import Logger

from src.domain.constants import (
    MAX_AMOUNT,
    OPTIONAL_DRIVERS,
    REQUIRED_DRIVERS,
    SIGNED_DRIVERS,
)
from src.domain.errors import InvalidInputError
from src.domain.models.statements import StatementInputs
from src.utils.decimal_utils import coerce_decimal, is_finite_number

SCALAR_FIELDS = (
    "beginning_cash",
    "tax_rate",
    "opening_fixed_assets",
    "opening_retained_earnings",
    "opening_deferred_revenue",
)


def validate_statement_inputs(
    inputs: StatementInputs,
    *,
    start_year: int,
    logger: Logger,
) -> None:
    """Reject malformed inputs before any statement is built.

    Args:
        inputs: Statement inputs supplied by the caller.
        start_year: Calendar year of the first modeled year.
        logger: Logger used for sign warnings.

    Raises:
        InvalidInputError: If lengths differ, the horizon is empty, or any
            value is not a finite number below MAX_AMOUNT in magnitude.
    """
    horizon = len(inputs.revenue)
    if horizon == 0:
        raise InvalidInputError(
            "Horizon must contain at least one year",
            field="revenue",
        )

    for name in (*REQUIRED_DRIVERS, *OPTIONAL_DRIVERS):
        values = getattr(inputs, name)
        if name in OPTIONAL_DRIVERS and not values:
            continue
        if len(values) != horizon:
            raise InvalidInputError(
                f"Driver '{name}' has {len(values)} entries, "
                f"expected {horizon}",
                field=name,
            )
        for index, value in enumerate(values):
            year = start_year + index
            if not is_finite_number(value):
                raise InvalidInputError(
                    f"Driver '{name}' is not a finite number in {year}: "
                    f"{value!r}",
                    year=year,
                    field=name,
                )
            _check_magnitude(name, value, year=year)
            validate_driver_sign(name, value, year, logger)

    for name in SCALAR_FIELDS:
        value = getattr(inputs, name)
        if not is_finite_number(value):
            raise InvalidInputError(
                f"'{name}' is not a finite number: {value!r}",
                field=name,
            )
        _check_magnitude(name, value)


def _check_magnitude(name: str, value, year: int | None = None) -> None:
    if abs(coerce_decimal(value)) >= MAX_AMOUNT:
        where = f" in {year}" if year is not None else ""
        raise InvalidInputError(
            f"'{name}' exceeds the supported magnitude{where}: {value!r}",
            year=year,
            field=name,
        )


def validate_driver_sign(name: str, value, year: int, logger: Logger) -> None:
    """Warn when a driver violates its expected sign convention.

    Args:
        name: Driver name.
        value: Raw driver value, already known to be finite.
        year: Calendar year of the value.
        logger: Logger used for warnings.
    """
    if name in SIGNED_DRIVERS:
        return
    if coerce_decimal(value) < 0:
        logger.warning(f"Driver '{name}' is negative in {year}: {value}")


__all__ = ["validate_statement_inputs", "validate_driver_sign"]
