"""
In-memory TTL cache for Sleeper API responses.

Injected into SleeperClient so that large, slow-changing payloads (the
player directory, season stats) are fetched once per TTL window.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class TTLCache:
    """
    Simple key/value cache with per-entry expiry.

    Usage:
        cache = TTLCache(default_ttl=3600)
        cache.set("players:nfl", players)
        if cache.has("players:nfl"):
            players = cache.get("players:nfl")
    """

    def __init__(
        self,
        default_ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a cached value, or default if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return default

        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return default

        return value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value for ttl seconds (default_ttl when omitted)."""
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        self._remove_expired(now)
        self._entries[key] = (value, now + ttl)

    def has(self, key: str) -> bool:
        """Check whether a live entry exists for key."""
        sentinel = object()
        return self.get(key, sentinel) is not sentinel

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _remove_expired(self, now: float) -> None:
        expired_keys = [
            key for key, (_, expires_at) in self._entries.items() if expires_at <= now
        ]
        for key in expired_keys:
            del self._entries[key]

        if expired_keys:
            logger.debug("Evicted %d expired cache entries", len(expired_keys))
