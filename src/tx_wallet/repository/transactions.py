"""Transaction repository — history read-through and create/sign/broadcast.

Composes the transaction cache, the indexer, the ledger RPC node and the
signer into the wallet's two transaction flows:

1. History — cache first; on any cache failure fall back to the indexer and
   write the result back.
2. Create — snapshot network → fetch nonce → sign → broadcast, strictly in
   that order, no retries.

The cache is flushed whenever the active network changes.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from tx_wallet.chain.rpc.client import DEFAULT_BLOCK, LedgerRPCClient
from tx_wallet.errors.chain_errors import LedgerRejectionError
from tx_wallet.errors.wallet_errors import CacheMissError, SigningError
from tx_wallet.models.wallet import normalize_address

if TYPE_CHECKING:
    from collections.abc import Callable

    from tx_wallet.cache.transactions import TransactionCache
    from tx_wallet.chain.indexer.client import IndexerClient
    from tx_wallet.keystore.service import TransactionSigner
    from tx_wallet.models.network import NetworkInfo
    from tx_wallet.models.transaction import Transaction
    from tx_wallet.models.wallet import Wallet
    from tx_wallet.network.repository import NetworkRepository

logger = logging.getLogger(__name__)


def to_hex(payload: bytes) -> str:
    """Encode signed bytes as ``0x``-prefixed lowercase hex."""
    return "0x" + payload.hex()


class TransactionRepository:
    """Single per-process access point for a wallet's transactions."""

    def __init__(
        self,
        network_repository: NetworkRepository,
        signer: TransactionSigner,
        cache: TransactionCache,
        indexer: IndexerClient,
        *,
        rpc_client_factory: Callable[[str], LedgerRPCClient] = LedgerRPCClient,
    ) -> None:
        """Wire the repository and subscribe to network changes.

        Args:
            network_repository: Source of the current network.
            signer: Key-store signing capability.
            cache: Per-wallet transaction cache.
            indexer: Remote transaction history service.
            rpc_client_factory: Builds an RPC client for a node URL.
        """
        self._networks = network_repository
        self._signer = signer
        self._cache = cache
        self._indexer = indexer
        self._rpc_client_factory = rpc_client_factory
        self._inflight: dict[str, asyncio.Future[list[Transaction]]] = {}
        self._unsubscribe: Callable[[], None] | None = network_repository.subscribe(
            self._on_network_changed
        )

    def close(self) -> None:
        """Stop reacting to network changes (idempotent)."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    async def fetch_transactions(self, wallet: Wallet) -> list[Transaction]:
        """Return *wallet*'s transaction history, preferring the cache.

        Cache failures of any kind count as a miss. Concurrent misses for the
        same address share a single indexer request.

        Raises:
            TransportError: The indexer failed (after a cache miss).
        """
        try:
            return await self._cache.fetch(wallet)
        except CacheMissError:
            logger.debug("Transaction cache miss for %s", wallet.address)
        except Exception:
            logger.warning("Transaction cache lookup failed for %s", wallet.address, exc_info=True)

        future = self._inflight.get(wallet.address)
        if future is None:
            future = asyncio.ensure_future(self._fetch_remote(wallet))
            self._inflight[wallet.address] = future
            future.add_done_callback(
                lambda done, address=wallet.address: self._forget(address, done)
            )
        return await asyncio.shield(future)

    async def find_transaction(self, wallet: Wallet, tx_hash: str) -> Transaction | None:
        """Return the transaction with hash *tx_hash*, or None if absent."""
        for transaction in await self.fetch_transactions(wallet):
            if transaction.hash == tx_hash:
                return transaction
        return None

    async def _fetch_remote(self, wallet: Wallet) -> list[Transaction]:
        generation = self._cache.generation
        transactions = await self._indexer.fetch_transactions(wallet.address)

        if self._cache.generation != generation:
            # Network switched mid-fetch; don't store data for the old network.
            logger.debug("Skipping cache write-back for %s after invalidation", wallet.address)
            return transactions
        try:
            await self._cache.put(wallet, transactions)
        except Exception:
            logger.warning("Transaction cache write failed for %s", wallet.address, exc_info=True)
        return transactions

    def _forget(self, address: str, future: asyncio.Future[list[Transaction]]) -> None:
        if self._inflight.get(address) is future:
            del self._inflight[address]
        if not future.cancelled():
            # Mark the outcome retrieved; waiting callers get it via shield().
            future.exception()

    # ------------------------------------------------------------------
    # Create / sign / broadcast
    # ------------------------------------------------------------------

    async def create_transaction(
        self,
        from_wallet: Wallet,
        to_address: str,
        amount: int,
        password: str,
    ) -> str:
        """Sign and broadcast a transfer of *amount* from *from_wallet*.

        Args:
            from_wallet: Sending wallet.
            to_address: Recipient address.
            amount: Value in the smallest unit (wei).
            password: Key-store password for *from_wallet*.

        Returns:
            Transaction hash reported by the node.

        Raises:
            WalletError: ``ErrInvalidAddress`` for a malformed recipient.
            TransportError: Nonce lookup or broadcast could not reach the node.
            SigningError: Wrong password or key-store failure.
            LedgerRejectionError: The node rejected the signed transaction.
        """
        to_address = normalize_address(to_address)
        network = self._networks.get_default_network()
        rpc = self._rpc_client_factory(network.rpc_server_url)

        await rpc.connect()
        try:
            nonce = await rpc.get_transaction_count(from_wallet.address, DEFAULT_BLOCK)
            signed = await self._sign(from_wallet, password, to_address, amount, nonce, network)
            result = await rpc.send_raw_transaction(to_hex(signed))
        finally:
            await rpc.close()

        if result.error is not None:
            logger.info(
                "Ledger rejected transaction from %s: %s",
                from_wallet.address,
                result.error.message,
            )
            raise LedgerRejectionError(result.error.message, rpc_code=result.error.code)

        logger.info(
            "Broadcast %s from %s on %s (nonce %d)",
            result.tx_hash,
            from_wallet.address,
            network.name,
            nonce,
        )
        return result.tx_hash

    async def _sign(
        self,
        wallet: Wallet,
        password: str,
        to_address: str,
        amount: int,
        nonce: int,
        network: NetworkInfo,
    ) -> bytes:
        try:
            return await self._signer.sign_transaction(
                wallet, password, to_address, amount, nonce, network.chain_id
            )
        except SigningError:
            raise
        except Exception as exc:
            raise SigningError(str(exc) or type(exc).__name__) from exc

    # ------------------------------------------------------------------
    # Network changes
    # ------------------------------------------------------------------

    def _on_network_changed(self, network: NetworkInfo) -> None:
        self._cache.clear()
        self._inflight.clear()
        logger.info("Transaction cache flushed for network %s", network.name)
