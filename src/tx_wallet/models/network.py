"""NetworkInfo — description of a ledger network."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tx_wallet.config.settings import NetworkConfig


@dataclass(frozen=True)
class NetworkInfo:
    """A ledger network the wallet can target.

    Attributes:
        name: Human-readable network name (unique within the configuration).
        symbol: Native currency ticker.
        rpc_server_url: JSON-RPC endpoint used for nonce lookup and broadcast.
        backend_url: Base URL of the transaction indexer for this network.
        chain_id: Chain identifier passed to the signer (replay protection).
        is_main_network: False for test networks.
    """

    name: str
    symbol: str
    rpc_server_url: str
    backend_url: str
    chain_id: int
    is_main_network: bool = False

    @classmethod
    def from_config(cls, config: NetworkConfig) -> NetworkInfo:
        """Build a NetworkInfo from a configured network entry."""
        return cls(
            name=config.name,
            symbol=config.symbol,
            rpc_server_url=config.rpc_server_url,
            backend_url=config.backend_url,
            chain_id=config.chain_id,
            is_main_network=config.is_main_network,
        )
