"""Remote ledger services — transaction indexer and JSON-RPC node."""

from tx_wallet.chain.indexer.client import IndexerClient
from tx_wallet.chain.rpc.client import LedgerRPCClient

__all__ = ["IndexerClient", "LedgerRPCClient"]
