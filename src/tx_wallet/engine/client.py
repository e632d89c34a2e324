"""WalletEngine — owns the transaction core's collaborators and their lifecycles."""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from tx_wallet.cache.client import CacheClient
from tx_wallet.cache.transactions import TransactionCache
from tx_wallet.chain.indexer.client import IndexerClient
from tx_wallet.chain.rpc.client import LedgerRPCClient
from tx_wallet.network.repository import NetworkRepository
from tx_wallet.repository.transactions import TransactionRepository

if TYPE_CHECKING:
    from collections.abc import Callable

    from tx_wallet.config.settings import AppConfig
    from tx_wallet.keystore.service import TransactionSigner

logger = logging.getLogger(__name__)

# Error messages
_ERR_NOT_INITIALIZED = "Engine not initialized. Call initialize() first."


class WalletEngine:
    """Builds the transaction repository and its collaborators from config.

    Usage::

        engine = WalletEngine(AppConfig(), signer)
        await engine.initialize()
        try:
            txs = await engine.transactions.fetch_transactions(Wallet("0x..."))
        finally:
            await engine.close()
    """

    def __init__(self, config: AppConfig, signer: TransactionSigner) -> None:
        """Initialize engine with configuration.

        Args:
            config: Application configuration (cache, indexer, rpc, networks).
            signer: Key-store signing capability.
        """
        self._config = config
        self._signer = signer
        self._initialized = False

        self._cache: CacheClient | None = None
        self._networks: NetworkRepository | None = None
        self._indexer: IndexerClient | None = None
        self._transactions: TransactionRepository | None = None
        self._unsubscribe_indexer: Callable[[], None] | None = None

    async def initialize(self) -> None:
        """Connect the cache and indexer and build the transaction repository.

        Raises:
            RuntimeError: If already initialized.
        """
        if self._initialized:
            msg = "Engine already initialized"
            raise RuntimeError(msg)

        self._cache = CacheClient(self._config.cache)
        await self._cache.connect()

        self._networks = NetworkRepository.from_config(self._config)
        network = self._networks.get_default_network()

        self._indexer = IndexerClient(
            network.backend_url,
            timeout=self._config.indexer.timeout,
            limit=self._config.indexer.limit,
        )
        await self._indexer.connect()
        self._unsubscribe_indexer = self._networks.subscribe(self._indexer.on_network_changed)

        self._transactions = TransactionRepository(
            self._networks,
            self._signer,
            TransactionCache(self._cache),
            self._indexer,
            rpc_client_factory=partial(LedgerRPCClient, timeout=self._config.rpc.timeout),
        )

        self._initialized = True
        logger.info("Wallet engine initialized on %s", network.name)

    async def close(self) -> None:
        """Shut down all collaborators.

        Can be called multiple times (idempotent).
        """
        if not self._initialized:
            return

        if self._transactions is not None:
            self._transactions.close()
            self._transactions = None

        if self._unsubscribe_indexer is not None:
            self._unsubscribe_indexer()
            self._unsubscribe_indexer = None

        if self._indexer is not None:
            await self._indexer.close()
            self._indexer = None

        if self._cache is not None:
            await self._cache.close()
            self._cache = None

        self._networks = None
        self._initialized = False
        logger.info("Wallet engine shut down")

    @property
    def is_initialized(self) -> bool:
        """Check if the engine is initialized."""
        return self._initialized

    @property
    def config(self) -> AppConfig:
        """Get the application configuration."""
        return self._config

    @property
    def cache(self) -> CacheClient:
        """Get the cache client instance.

        Raises:
            RuntimeError: If engine not initialized.
        """
        if self._cache is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._cache

    @property
    def networks(self) -> NetworkRepository:
        """Get the network repository."""
        if self._networks is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._networks

    @property
    def indexer(self) -> IndexerClient:
        """Get the indexer client."""
        if self._indexer is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._indexer

    @property
    def transactions(self) -> TransactionRepository:
        """Get the transaction repository."""
        if self._transactions is None:
            raise RuntimeError(_ERR_NOT_INITIALIZED)
        return self._transactions
