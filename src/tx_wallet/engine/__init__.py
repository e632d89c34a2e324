"""Engine — wiring and lifecycle of the wallet transaction core."""

from tx_wallet.engine.client import WalletEngine

__all__ = ["WalletEngine"]
