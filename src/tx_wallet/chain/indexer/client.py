"""Transaction indexer REST client — wallet transaction history.

Async HTTP client for the block-explorer backend of the active network:
- GET /transactions?address=<addr>&limit=<n>

The response is ``{"docs": [...]}``; a bare JSON list is accepted as well.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from tx_wallet.errors.chain_errors import IndexerError
from tx_wallet.models.transaction import Transaction

if TYPE_CHECKING:
    from tx_wallet.models.network import NetworkInfo

logger = logging.getLogger(__name__)


class IndexerClient:
    """Async HTTP client for the transaction indexer.

    Usage::

        indexer = IndexerClient("https://api.trustwalletapp.com")
        await indexer.connect()
        try:
            txs = await indexer.fetch_transactions("0xabc...")
        finally:
            await indexer.close()
    """

    def __init__(self, base_url: str, *, timeout: float = 30.0, limit: int = 50) -> None:
        """Initialize the indexer client.

        Args:
            base_url: Indexer base URL for the active network.
            timeout: Per-request timeout in seconds.
            limit: Maximum number of transactions requested per call.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._limit = limit
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=self._timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_base_url(self, base_url: str) -> None:
        """Point subsequent requests at another indexer."""
        self._base_url = base_url.rstrip("/")

    def on_network_changed(self, network: NetworkInfo) -> None:
        """Network-change subscriber: follow the new network's indexer."""
        self.set_base_url(network.backend_url)
        logger.debug("Indexer retargeted to %s", self._base_url)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_transactions(self, address: str) -> list[Transaction]:
        """Fetch the transaction history of *address*.

        Args:
            address: Wallet address (``0x`` hex).

        Returns:
            Transactions as reported by the indexer, newest first.

        Raises:
            IndexerError: On HTTP errors or malformed responses.
        """
        client = self._ensure_connected()

        try:
            resp = await client.get(
                f"{self._base_url}/transactions",
                params={"address": address, "limit": self._limit},
            )
        except httpx.HTTPError as exc:
            raise IndexerError(f"Indexer request failed: {exc}") from exc

        if resp.status_code != 200:
            msg = f"Indexer returned {resp.status_code} for {address}"
            raise IndexerError(msg, status_code=resp.status_code)

        try:
            body: Any = resp.json()
        except ValueError as exc:
            raise IndexerError("Indexer returned a non-JSON body") from exc

        docs = body.get("docs") if isinstance(body, dict) else body
        if not isinstance(docs, list):
            raise IndexerError("Indexer response has no transaction list")

        try:
            transactions = [Transaction.from_dict(doc) for doc in docs]
        except (AttributeError, TypeError) as exc:
            raise IndexerError("Indexer returned a malformed transaction") from exc

        logger.debug("Indexer returned %d transactions for %s", len(transactions), address)
        return transactions

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "Indexer client not connected. Call connect() first."
            raise IndexerError(msg, status_code=500)
        return self._client
