"""Indexer & ledger RPC errors."""

from __future__ import annotations

from tx_wallet.errors.wallet_errors import WalletError


class TransportError(WalletError):
    """Remote service unreachable or returned a malformed response."""

    def __init__(
        self, message: str, *, status_code: int = 502, code: str = "transport-error"
    ) -> None:
        super().__init__(message, status_code=status_code, code=code)


class IndexerError(TransportError):
    """Error from the transaction indexer (block explorer) service."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message, status_code=status_code, code="indexer-error")


class RPCError(TransportError):
    """Error from the ledger JSON-RPC endpoint.

    Attributes:
        rpc_code: JSON-RPC error code, when the node returned an error object.
    """

    def __init__(
        self, message: str, *, status_code: int = 502, rpc_code: int | None = None
    ) -> None:
        super().__init__(message, status_code=status_code, code="rpc-error")
        self.rpc_code = rpc_code


class LedgerRejectionError(WalletError):
    """The node accepted the call but the ledger rejected the transaction.

    The message is the node's error message, verbatim.
    """

    def __init__(self, message: str, *, rpc_code: int | None = None) -> None:
        super().__init__(message, status_code=422, code="ledger-rejection")
        self.rpc_code = rpc_code
