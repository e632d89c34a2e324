"""Network context — the currently selected ledger network."""

from tx_wallet.network.repository import NetworkRepository

__all__ = ["NetworkRepository"]
