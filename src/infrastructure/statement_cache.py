"""In-memory statement cache with per-entry expiry."""

import threading
import time
from typing import Any, Callable

from src.application.ports.statement_cache import StatementCachePort


class InMemoryStatementCache(StatementCachePort):
    """Thread-safe dictionary cache keyed by string.

    Expired entries are dropped on read and whenever a new entry is stored.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            clock: Monotonic clock returning seconds.
        """
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError(
                f"ttl_seconds must be positive, got {ttl_seconds}"
            )
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = (now + ttl_seconds, value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_prefix(self, prefix: str) -> int:
        with self._lock:
            keys = [key for key in self._entries if key.startswith(prefix)]
            for key in keys:
                del self._entries[key]
        return len(keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _purge_expired(self, now: float) -> None:
        expired = [
            key
            for key, (expires_at, _) in self._entries.items()
            if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]


__all__ = ["InMemoryStatementCache"]
