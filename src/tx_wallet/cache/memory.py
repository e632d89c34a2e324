"""In-memory LRU cache backend."""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tx_wallet.config.settings import CacheConfig


class MemoryCache:
    """In-memory LRU cache with per-key TTL.

    Single event loop only; no locking.
    """

    def __init__(self, config: CacheConfig, max_size: int = 10_000) -> None:
        """Initialize in-memory cache.

        Args:
            config: Cache configuration (unused for memory backend).
            max_size: Maximum number of keys to store before evicting LRU.
        """
        self._config = config
        self._max_size = max_size
        # {key: (value, expiry_timestamp_or_none)}
        self._cache: OrderedDict[str, tuple[str, float | None]] = OrderedDict()

    async def connect(self) -> None:  # noqa: ASYNC910
        """Connect (no-op for in-memory)."""

    async def close(self) -> None:  # noqa: ASYNC910
        """Close and clear the cache."""
        self._cache.clear()

    def _live_value(self, key: str) -> str | None:
        """Return the value for *key*, dropping it first if expired."""
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expiry = entry
        if expiry is not None and time.monotonic() > expiry:
            del self._cache[key]
            return None
        return value

    async def get(self, key: str) -> str | None:  # noqa: ASYNC910
        """Get a value, or None if not found/expired."""
        value = self._live_value(key)
        if value is not None:
            self._cache.move_to_end(key)
        return value

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:  # noqa: ASYNC910
        """Set a value. ``ttl`` is in seconds; None = no expiry."""
        expiry = None if ttl is None else time.monotonic() + ttl

        self._cache.pop(key, None)
        self._cache[key] = (value, expiry)

        while len(self._cache) > self._max_size:
            self._cache.popitem(last=False)

    async def delete(self, key: str) -> None:  # noqa: ASYNC910
        """Delete a key from the cache."""
        self._cache.pop(key, None)

    async def exists(self, key: str) -> bool:  # noqa: ASYNC910
        """Check if a key exists and is not expired."""
        return self._live_value(key) is not None

    async def flush(self) -> None:  # noqa: ASYNC910
        """Clear all keys from the cache."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
