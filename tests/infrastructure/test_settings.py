"""Tests for projection settings."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import ProjectionSettings

_ENV_VARS = (
    "PROJECTION_MAX_PASSES",
    "PROJECTION_BALANCE_TOLERANCE",
    "STATEMENTS_CACHE_TTL",
    "MODEL_START_YEAR",
    "PROJECTION_DEPOSIT_RATE",
    "PROJECTION_OVERDRAFT_RATE",
)


@pytest.fixture
def logger(monkeypatch):
    fake_logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: fake_logger)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return fake_logger


def test_from_env_defaults(logger) -> None:
    settings = ProjectionSettings.from_env()

    assert settings == ProjectionSettings()
    assert settings.max_passes == 10
    assert settings.balance_tolerance == Decimal("0.01")
    assert settings.cache_ttl_seconds == 300
    assert settings.start_year == 2023
    logger.warning.assert_not_called()


def test_from_env_reads_values(monkeypatch, logger) -> None:
    monkeypatch.setenv("PROJECTION_MAX_PASSES", "25")
    monkeypatch.setenv("PROJECTION_BALANCE_TOLERANCE", "0.5")
    monkeypatch.setenv("STATEMENTS_CACHE_TTL", " 60 ")
    monkeypatch.setenv("MODEL_START_YEAR", "2025")
    monkeypatch.setenv("PROJECTION_DEPOSIT_RATE", "0.02")
    monkeypatch.setenv("PROJECTION_OVERDRAFT_RATE", "0.09")

    settings = ProjectionSettings.from_env()

    assert settings.max_passes == 25
    assert settings.balance_tolerance == Decimal("0.5")
    assert settings.cache_ttl_seconds == 60
    assert settings.start_year == 2025
    assert settings.deposit_rate == Decimal("0.02")
    assert settings.overdraft_rate == Decimal("0.09")


@pytest.mark.parametrize(
    ("name", "value", "attribute", "default"),
    [
        ("PROJECTION_MAX_PASSES", "ten", "max_passes", 10),
        ("PROJECTION_MAX_PASSES", "0", "max_passes", 10),
        ("STATEMENTS_CACHE_TTL", "-5", "cache_ttl_seconds", 300),
        (
            "PROJECTION_BALANCE_TOLERANCE",
            "NaN",
            "balance_tolerance",
            Decimal("0.01"),
        ),
        (
            "PROJECTION_OVERDRAFT_RATE",
            "-0.1",
            "overdraft_rate",
            Decimal("0"),
        ),
    ],
)
def test_from_env_falls_back_on_invalid_values(
    monkeypatch,
    logger,
    name,
    value,
    attribute,
    default,
) -> None:
    monkeypatch.setenv(name, value)

    settings = ProjectionSettings.from_env()

    assert getattr(settings, attribute) == default
    logger.warning.assert_called_once()
    assert name in logger.warning.call_args.args[0]
