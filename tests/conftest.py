"""Shared test fixtures for tx-wallet test suite."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock

import pytest

from tx_wallet.config.settings import CacheConfig, CacheEngine
from tx_wallet.models.network import NetworkInfo
from tx_wallet.models.wallet import Wallet

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from tx_wallet.cache.client import CacheClient

WALLET_ADDRESS = "0x" + "ab" * 20
RECIPIENT_ADDRESS = "0x" + "cd" * 20

MAINNET = NetworkInfo(
    name="Ethereum",
    symbol="ETH",
    rpc_server_url="https://rpc.mainnet.test",
    backend_url="https://indexer.mainnet.test",
    chain_id=1,
    is_main_network=True,
)
KOVAN = NetworkInfo(
    name="Kovan (Test)",
    symbol="ETH",
    rpc_server_url="https://rpc.kovan.test",
    backend_url="https://indexer.kovan.test",
    chain_id=42,
)


@pytest.fixture
def wallet() -> Wallet:
    return Wallet(WALLET_ADDRESS)


@pytest.fixture
def app_config():
    """Provide a test AppConfig with safe defaults."""
    from tx_wallet.config.settings import AppConfig, NetworkConfig

    return AppConfig(
        debug=True,
        cache=CacheConfig(engine=CacheEngine.MEMORY, ttl_seconds=60),
        networks=[
            NetworkConfig(
                name=n.name,
                symbol=n.symbol,
                rpc_server_url=n.rpc_server_url,
                backend_url=n.backend_url,
                chain_id=n.chain_id,
                is_main_network=n.is_main_network,
            )
            for n in (MAINNET, KOVAN)
        ],
        default_network=MAINNET.name,
    )


@pytest.fixture
async def cache_client() -> AsyncIterator[CacheClient]:
    """Provide a connected in-memory cache client."""
    from tx_wallet.cache.client import CacheClient

    client = CacheClient(CacheConfig(engine=CacheEngine.MEMORY))
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
def network_repository():
    """Two-network repository with mainnet selected."""
    from tx_wallet.network.repository import NetworkRepository

    return NetworkRepository([MAINNET, KOVAN], default=MAINNET.name)


@pytest.fixture
def signer() -> AsyncMock:
    """Signing capability double; returns ``0xdead`` by default."""
    mock = AsyncMock()
    mock.sign_transaction.return_value = bytes.fromhex("dead")
    return mock


@pytest.fixture
def mainnet() -> NetworkInfo:
    return MAINNET


@pytest.fixture
def kovan() -> NetworkInfo:
    return KOVAN
