"""JSON-RPC response models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RPCErrorInfo:
    """A JSON-RPC error object (``{"code": ..., "message": ...}``)."""

    code: int = 0
    message: str = ""
    data: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RPCErrorInfo:
        """Create RPCErrorInfo from a JSON-RPC ``error`` member."""
        return cls(
            code=data.get("code", 0),
            message=data.get("message", ""),
            data=data.get("data"),
        )


@dataclass(frozen=True)
class SendRawTransactionResult:
    """Outcome of ``eth_sendRawTransaction``.

    Exactly one of ``tx_hash`` / ``error`` is set.
    """

    tx_hash: str = ""
    error: RPCErrorInfo | None = None

    @property
    def has_error(self) -> bool:
        """True when the node rejected the transaction."""
        return self.error is not None
