"""Ledger JSON-RPC client — nonce lookup and raw transaction broadcast.

Provides an async JSON-RPC 2.0 client over HTTP for an Ethereum-style node:
- eth_getTransactionCount(address, block) — account nonce
- eth_sendRawTransaction(data) — broadcast a signed transaction
"""

from __future__ import annotations

import itertools
import logging
from typing import Any

import httpx

from tx_wallet.chain.rpc.models import RPCErrorInfo, SendRawTransactionResult
from tx_wallet.errors.chain_errors import RPCError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BLOCK = "latest"


class LedgerRPCClient:
    """Async JSON-RPC client bound to one node endpoint.

    Usage::

        rpc = LedgerRPCClient("https://mainnet.infura.io/...")
        await rpc.connect()
        try:
            nonce = await rpc.get_transaction_count("0xabc...")
            result = await rpc.send_raw_transaction("0xf86c...")
        finally:
            await rpc.close()
    """

    def __init__(self, url: str, *, timeout: float = 30.0) -> None:
        """Initialize the RPC client.

        Args:
            url: Node JSON-RPC endpoint.
            timeout: Per-request timeout in seconds.
        """
        self._url = url
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None
        self._ids = itertools.count(1)

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
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
    def url(self) -> str:
        return self._url

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_transaction_count(self, address: str, block: str = DEFAULT_BLOCK) -> int:
        """Return the number of transactions sent from *address* (its next nonce).

        Raises:
            TransportError: If the node is unreachable or the reply is not JSON-RPC.
            RPCError: If the node returns an error or a malformed quantity.
        """
        body = await self._call("eth_getTransactionCount", [address, block])
        if body.get("error") is not None:
            err = RPCErrorInfo.from_dict(body["error"])
            msg = f"eth_getTransactionCount failed: {err.message}"
            raise RPCError(msg, rpc_code=err.code)

        result = body.get("result")
        if not isinstance(result, str) or not result.startswith("0x"):
            msg = f"Malformed transaction count: {result!r}"
            raise RPCError(msg)
        try:
            return int(result, 16)
        except ValueError as exc:
            msg = f"Malformed transaction count: {result!r}"
            raise RPCError(msg) from exc

    async def send_raw_transaction(self, signed_tx_hex: str) -> SendRawTransactionResult:
        """Submit a signed transaction.

        Args:
            signed_tx_hex: ``0x``-prefixed hex of the signed transaction.

        Returns:
            SendRawTransactionResult with either the tx hash or the node's error.

        Raises:
            TransportError: If the node is unreachable or the reply is not JSON-RPC.
            RPCError: If the node reports success without a transaction hash.
        """
        body = await self._call("eth_sendRawTransaction", [signed_tx_hex])
        if body.get("error") is not None:
            return SendRawTransactionResult(error=RPCErrorInfo.from_dict(body["error"]))

        result = body.get("result")
        if not isinstance(result, str) or not result.startswith("0x") or len(result) <= 2:
            msg = f"Malformed transaction hash: {result!r}"
            raise RPCError(msg)
        return SendRawTransactionResult(tx_hash=result)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _call(self, method: str, params: list[Any]) -> dict[str, Any]:
        """POST one JSON-RPC request and return the decoded response object."""
        client = self._ensure_connected()
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}

        try:
            response = await client.post(self._url, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"RPC {method} failed: {exc}") from exc

        if response.status_code != 200:
            msg = f"RPC {method} failed ({response.status_code}): {response.text}"
            raise TransportError(msg, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(f"RPC {method} returned a non-JSON body") from exc

        if not isinstance(body, dict) or ("result" not in body and "error" not in body):
            raise TransportError(f"RPC {method} returned a malformed response")
        error = body.get("error")
        if error is not None and not isinstance(error, dict):
            raise TransportError(f"RPC {method} returned a malformed error")

        logger.debug("RPC %s -> %s", method, "error" if body.get("error") else "ok")
        return body

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Return the HTTP client, raising if not connected."""
        if self._client is None:
            msg = "RPC client not connected. Call connect() first."
            raise TransportError(msg, status_code=500)
        return self._client
