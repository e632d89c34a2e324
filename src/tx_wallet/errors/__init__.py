"""Wallet error hierarchy."""

from tx_wallet.errors.chain_errors import (
    IndexerError,
    LedgerRejectionError,
    RPCError,
    TransportError,
)
from tx_wallet.errors.wallet_errors import CacheMissError, SigningError, WalletError

__all__ = [
    "CacheMissError",
    "IndexerError",
    "LedgerRejectionError",
    "RPCError",
    "SigningError",
    "TransportError",
    "WalletError",
]
