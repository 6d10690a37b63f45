"""Port for caching generated statements."""

from typing import Any, Protocol


class StatementCachePort(Protocol):
    """Port exposing a key/value cache with expiry."""

    def get(self, key: str) -> Any | None:
        """Return the cached value or None when missing or expired."""

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a value for ttl_seconds."""

    def delete(self, key: str) -> None:
        """Drop a single key."""

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every key starting with prefix and return how many."""


__all__ = ["StatementCachePort"]
