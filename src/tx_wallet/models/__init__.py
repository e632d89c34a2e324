"""Wallet core value objects."""

from tx_wallet.models.network import NetworkInfo
from tx_wallet.models.transaction import Transaction, TransactionOperation, TxStatus
from tx_wallet.models.wallet import Wallet

__all__ = ["NetworkInfo", "Transaction", "TransactionOperation", "TxStatus", "Wallet"]
