"""Transaction data models — historical and pending ledger transactions.

Data classes matching the indexer's JSON documents. Field names accept both
the indexer's camelCase keys and snake_case, as the cache stores ``to_dict()``
output and reads it back through ``from_dict()``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Status enum
# ---------------------------------------------------------------------------


class TxStatus(enum.StrEnum):
    """Ledger status of a transaction."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> TxStatus:
        """Parse a status string, returning UNKNOWN for unrecognised values."""
        try:
            return cls(value.lower())
        except ValueError:
            return cls.UNKNOWN


def _as_int(value: Any, default: int = 0) -> int:
    """Coerce decimal strings, ``0x`` quantities and ints to int."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    text = str(value)
    try:
        return int(text, 16) if text.startswith("0x") else int(text)
    except ValueError:
        return default


def _as_str(value: Any, default: str = "") -> str:
    """Coerce to str, mapping JSON null to *default*."""
    return default if value is None else str(value)


# ---------------------------------------------------------------------------
# Token transfer operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransactionOperation:
    """A sub-operation of a transaction, e.g. a token transfer.

    Attributes:
        transaction_id: Hash of the parent transaction.
        type: Operation type (``token_transfer``).
        from_address: Token sender.
        to_address: Token recipient.
        value: Raw token amount (decimal string).
        contract: Token contract address.
        symbol: Token ticker.
        decimals: Token decimals.
    """

    transaction_id: str = ""
    type: str = ""
    from_address: str = ""
    to_address: str = ""
    value: str = "0"
    contract: str = ""
    symbol: str = ""
    decimals: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransactionOperation:
        """Create an operation from an indexer JSON dict."""
        contract = data.get("contract") or {}
        if isinstance(contract, str):
            contract = {"address": contract}
        return cls(
            transaction_id=_as_str(data.get("transactionId", data.get("transaction_id"))),
            type=_as_str(data.get("type")),
            from_address=_as_str(data.get("from", data.get("from_address"))),
            to_address=_as_str(data.get("to", data.get("to_address"))),
            value=_as_str(data.get("value"), "0"),
            contract=_as_str(contract.get("address")),
            symbol=_as_str(contract.get("symbol", data.get("symbol"))),
            decimals=_as_int(contract.get("decimals", data.get("decimals", 0))),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict matching the indexer JSON format."""
        return {
            "transactionId": self.transaction_id,
            "type": self.type,
            "from": self.from_address,
            "to": self.to_address,
            "value": self.value,
            "contract": {
                "address": self.contract,
                "symbol": self.symbol,
                "decimals": self.decimals,
            },
        }


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Transaction:
    """A ledger transaction as reported by the indexer.

    ``hash`` is unique within one (wallet, network) pair.

    Attributes:
        hash: Transaction hash (``0x`` hex).
        from_address: Sender address.
        to_address: Recipient address (empty for contract creation).
        value: Transferred amount in the smallest unit (decimal string).
        status: Ledger status.
        block_number: Block height, 0 while pending.
        timestamp: Unix timestamp of the block.
        nonce: Sender nonce.
        gas: Gas limit.
        gas_price: Gas price (decimal string).
        gas_used: Gas consumed.
        input: Call data (hex).
        error: Execution error reported by the indexer.
        operations: Token transfers performed by this transaction.
    """

    hash: str
    from_address: str = ""
    to_address: str = ""
    value: str = "0"
    status: TxStatus = TxStatus.UNKNOWN
    block_number: int = 0
    timestamp: int = 0
    nonce: int = 0
    gas: str = ""
    gas_price: str = ""
    gas_used: str = ""
    input: str = ""
    error: str = ""
    operations: tuple[TransactionOperation, ...] = field(default_factory=tuple)

    @property
    def is_pending(self) -> bool:
        """Check if the transaction has not been mined yet."""
        return self.status == TxStatus.PENDING

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transaction:
        """Create a Transaction from an indexer (or cached) JSON dict."""
        block_number = _as_int(data.get("blockNumber", data.get("block_number", 0)))
        error = data.get("error") or ""
        if "status" in data:
            status = TxStatus.from_string(str(data["status"]))
        elif error or str(data.get("isError", "0")) == "1":
            status = TxStatus.FAILED
        elif block_number == 0:
            status = TxStatus.PENDING
        else:
            status = TxStatus.SUCCESS

        return cls(
            hash=_as_str(data.get("hash", data.get("id"))),
            from_address=_as_str(data.get("from", data.get("from_address"))),
            to_address=_as_str(data.get("to", data.get("to_address"))),
            value=_as_str(data.get("value"), "0"),
            status=status,
            block_number=block_number,
            timestamp=_as_int(data.get("timeStamp", data.get("timestamp", 0))),
            nonce=_as_int(data.get("nonce", 0)),
            gas=_as_str(data.get("gas")),
            gas_price=_as_str(data.get("gasPrice", data.get("gas_price"))),
            gas_used=_as_str(data.get("gasUsed", data.get("gas_used"))),
            input=_as_str(data.get("input")),
            error=error,
            operations=tuple(
                TransactionOperation.from_dict(op) for op in data.get("operations") or []
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict matching the indexer JSON format."""
        return {
            "hash": self.hash,
            "from": self.from_address,
            "to": self.to_address,
            "value": self.value,
            "status": self.status.value,
            "blockNumber": self.block_number,
            "timeStamp": self.timestamp,
            "nonce": self.nonce,
            "gas": self.gas,
            "gasPrice": self.gas_price,
            "gasUsed": self.gas_used,
            "input": self.input,
            "error": self.error,
            "operations": [op.to_dict() for op in self.operations],
        }
