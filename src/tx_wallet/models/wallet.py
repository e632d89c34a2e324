"""Wallet — an account identified by its ledger address."""

from __future__ import annotations

import re
from dataclasses import dataclass

from tx_wallet.errors.definitions import ErrInvalidAddress

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")


def normalize_address(address: str) -> str:
    """Return the canonical lower-case form of a ledger address.

    Raises:
        WalletError: ``ErrInvalidAddress`` if not ``0x`` + 40 hex characters.
    """
    candidate = address.strip().lower()
    if not _ADDRESS_RE.match(candidate):
        raise ErrInvalidAddress
    return candidate


@dataclass(frozen=True)
class Wallet:
    """A wallet account. Immutable; the address is normalized on construction."""

    address: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", normalize_address(self.address))
