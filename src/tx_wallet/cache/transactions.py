"""Per-wallet transaction list cache.

Keys are ``txs:<namespace>:<generation>:<address>``. ``clear()`` bumps the
generation, which makes every earlier entry unreachable at once without a
round-trip to the backend. Keys written under an old generation are deleted
before the next ``put``, so the backend holds at most one generation's worth
of live entries plus those awaiting deletion.
The namespace is random per instance so a restarted process never reads
entries written under another process's generations; those are reclaimed by
the backend TTL.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import TYPE_CHECKING

from tx_wallet.errors.wallet_errors import CacheMissError
from tx_wallet.models.transaction import Transaction

if TYPE_CHECKING:
    from tx_wallet.cache.client import CacheClient
    from tx_wallet.models.wallet import Wallet

logger = logging.getLogger(__name__)

_KEY_PREFIX = "txs"


class TransactionCache:
    """Stores and retrieves transaction lists keyed by wallet address."""

    def __init__(self, client: CacheClient) -> None:
        self._client = client
        self._namespace = uuid.uuid4().hex[:12]
        self._generation = 0
        self._written: set[str] = set()
        self._stale: set[str] = set()

    @property
    def generation(self) -> int:
        """Invalidation counter; changes on every ``clear()``."""
        return self._generation

    @property
    def pending_deletes(self) -> int:
        """Number of invalidated keys not yet removed from the backend."""
        return len(self._stale)

    def _key(self, wallet: Wallet) -> str:
        return f"{_KEY_PREFIX}:{self._namespace}:{self._generation}:{wallet.address}"

    async def fetch(self, wallet: Wallet) -> list[Transaction]:
        """Return the cached transactions for *wallet*.

        Raises:
            CacheMissError: Nothing cached, entry expired, entry unreadable, or
                the cache was cleared while the read was in flight.
        """
        generation = self._generation
        raw = await self._client.get(self._key(wallet))
        if generation != self._generation:
            msg = f"transaction cache cleared during lookup for {wallet.address}"
            raise CacheMissError(msg)
        if raw is None:
            msg = f"no cached transactions for {wallet.address}"
            raise CacheMissError(msg)
        try:
            items = json.loads(raw)
            return [Transaction.from_dict(item) for item in items]
        except (ValueError, TypeError, AttributeError) as exc:
            msg = f"corrupt transaction cache entry for {wallet.address}"
            raise CacheMissError(msg) from exc

    async def put(self, wallet: Wallet, transactions: list[Transaction]) -> None:
        """Store *transactions* for *wallet* under the current generation.

        Entries invalidated by an earlier ``clear()`` are deleted first.
        """
        await self.purge()
        key = self._key(wallet)
        payload = json.dumps([tx.to_dict() for tx in transactions])
        self._written.add(key)
        await self._client.set(key, payload)

    async def purge(self) -> None:
        """Delete every entry invalidated by ``clear()`` from the backend."""
        while self._stale:
            key = self._stale.pop()
            try:
                await self._client.delete(key)
            except Exception:
                self._stale.add(key)
                raise

    def clear(self) -> None:
        """Invalidate every wallet's entry. Synchronous and idempotent."""
        self._generation += 1
        self._stale |= self._written
        self._written = set()
        logger.debug(
            "Transaction cache cleared (generation %d, %d entries to delete)",
            self._generation,
            len(self._stale),
        )
