"""Transaction repository — the wallet's transaction orchestrator."""

from tx_wallet.repository.transactions import TransactionRepository

__all__ = ["TransactionRepository"]
