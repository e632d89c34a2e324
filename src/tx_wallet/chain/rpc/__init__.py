"""Ledger JSON-RPC — nonce lookup and raw transaction broadcast."""

from tx_wallet.chain.rpc.client import LedgerRPCClient
from tx_wallet.chain.rpc.models import RPCErrorInfo, SendRawTransactionResult

__all__ = ["LedgerRPCClient", "RPCErrorInfo", "SendRawTransactionResult"]
