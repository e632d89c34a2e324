"""TransactionSigner — the key-store signing capability.

Key storage and signing live outside this package; anything matching this
protocol can be handed to the engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tx_wallet.models.wallet import Wallet


@runtime_checkable
class TransactionSigner(Protocol):
    """Signs outgoing transactions with the wallet's stored key."""

    async def sign_transaction(
        self,
        wallet: Wallet,
        password: str,
        to_address: str,
        amount: int,
        nonce: int,
        chain_id: int,
    ) -> bytes:
        """Return the signed, serialized transaction.

        Should raise ``SigningError`` for a wrong password or key-store failure.
        """
        ...
