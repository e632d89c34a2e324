"""Cache layer — key/value backends and the per-wallet transaction cache."""

from tx_wallet.cache.client import CacheClient
from tx_wallet.cache.transactions import TransactionCache

__all__ = ["CacheClient", "TransactionCache"]
