"""WalletError — base exception class for all tx-wallet errors."""

from __future__ import annotations


class WalletError(Exception):
    """Base error for all wallet transaction operations.

    Attributes:
        message: Human-readable error description.
        status_code: Suggested HTTP status code.
        code: Machine-readable error code string.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int = 500,
        code: str = "wallet-error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class SigningError(WalletError):
    """Wrong password or key-store failure while signing a transaction."""

    def __init__(self, message: str, *, status_code: int = 401) -> None:
        super().__init__(message, status_code=status_code, code="signing-error")


class CacheMissError(WalletError):
    """Nothing usable in the local transaction cache (absorbed by the repository)."""

    def __init__(self, message: str = "transaction cache miss") -> None:
        super().__init__(message, status_code=404, code="cache-miss")
