"""Application use cases package."""

from .generate_statements import (
    GenerateStatementsUseCase,
    statements_cache_key,
)

__all__ = [
    "GenerateStatementsUseCase",
    "statements_cache_key",
]
