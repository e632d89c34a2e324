"""Indexer — block-explorer transaction history."""

from tx_wallet.chain.indexer.client import IndexerClient

__all__ = ["IndexerClient"]
