"""Signing capability consumed by the transaction repository."""

from tx_wallet.keystore.service import TransactionSigner

__all__ = ["TransactionSigner"]
