"""Pre-defined error instances shared across the wallet core."""

from __future__ import annotations

from tx_wallet.errors.wallet_errors import WalletError

# -- Validation ------------------------------------------------------------

ErrInvalidAddress = WalletError(
    "invalid ledger address", status_code=400, code="invalid-address"
)

# -- Network ---------------------------------------------------------------

ErrUnknownNetwork = WalletError("unknown network", status_code=404, code="unknown-network")
