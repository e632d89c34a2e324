"""Cache client abstraction with Redis and in-memory backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from tx_wallet.config.settings import CacheEngine

if TYPE_CHECKING:
    from tx_wallet.config.settings import CacheConfig


class CacheClient:
    """Cache abstraction that delegates to Redis or in-memory LRU backend.

    Values written without an explicit ``ttl`` expire after
    ``config.ttl_seconds`` (0 disables expiry).
    """

    def __init__(self, config: CacheConfig) -> None:
        """Initialize cache client with configuration.

        Args:
            config: Cache configuration with engine type and connection params.
        """
        self._config = config
        self._backend: CacheBackend | None = None

    async def connect(self) -> None:
        """Connect to the cache backend.

        Raises:
            ValueError: If cache engine type is invalid.
        """
        from tx_wallet.cache.memory import MemoryCache
        from tx_wallet.cache.redis import RedisCache

        engine = str(self._config.engine).lower()

        if engine == CacheEngine.REDIS:
            backend: CacheBackend = RedisCache(self._config)
        elif engine == CacheEngine.MEMORY:
            backend = MemoryCache(self._config, max_size=self._config.max_size)
        else:
            msg = f"Unsupported cache engine: {engine}"
            raise ValueError(msg)

        await backend.connect()
        self._backend = backend

    async def close(self) -> None:
        """Close the cache connection (idempotent)."""
        if self._backend is not None:
            await self._backend.close()
            self._backend = None

    @property
    def is_connected(self) -> bool:
        """Check if the cache is connected."""
        return self._backend is not None

    @property
    def default_ttl(self) -> int | None:
        """TTL applied to writes that don't pass one."""
        return self._config.ttl_seconds or None

    async def get(self, key: str) -> str | None:
        """Get a value from the cache.

        Returns:
            The cached value as a string, or None if not found.

        Raises:
            RuntimeError: If not connected.
        """
        return await self._ensure_connected().get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """Set a value in the cache.

        Args:
            key: Cache key.
            value: Value to store (string).
            ttl: Time-to-live in seconds. None = configured default.

        Raises:
            RuntimeError: If not connected.
        """
        effective_ttl = ttl if ttl is not None else self.default_ttl
        await self._ensure_connected().set(key, value, ttl=effective_ttl)

    async def delete(self, key: str) -> None:
        """Delete a key from the cache.

        Raises:
            RuntimeError: If not connected.
        """
        await self._ensure_connected().delete(key)

    async def exists(self, key: str) -> bool:
        """Check if a key exists in the cache.

        Raises:
            RuntimeError: If not connected.
        """
        return await self._ensure_connected().exists(key)

    async def flush(self) -> None:
        """Flush all keys from the cache (development/testing only).

        Raises:
            RuntimeError: If not connected.
        """
        await self._ensure_connected().flush()

    def _ensure_connected(self) -> CacheBackend:
        """Return the backend, raising RuntimeError if not connected."""
        if self._backend is None:
            msg = "Cache not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._backend


class CacheBackend(Protocol):
    """Protocol for cache backend implementations."""

    async def connect(self) -> None: ...
    async def close(self) -> None: ...
    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str, ttl: int | None = None) -> None: ...
    async def delete(self, key: str) -> None: ...
    async def exists(self, key: str) -> bool: ...
    async def flush(self) -> None: ...
