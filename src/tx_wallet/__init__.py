"""tx-wallet — transaction history and broadcast core for account-based wallets."""

__version__ = "0.1.0"
