"""Tests for WalletEngine — wiring and lifecycle."""

from __future__ import annotations

import httpx
import pytest

from tx_wallet.engine.client import WalletEngine
from tx_wallet.models.wallet import Wallet
from tx_wallet.repository.transactions import TransactionRepository


@pytest.fixture
async def engine(app_config, signer):
    eng = WalletEngine(app_config, signer)
    await eng.initialize()
    yield eng
    await eng.close()


class TestLifecycle:
    async def test_accessors_before_initialize_raise(self, app_config, signer) -> None:
        eng = WalletEngine(app_config, signer)
        assert eng.is_initialized is False
        for name in ("cache", "networks", "indexer", "transactions"):
            with pytest.raises(RuntimeError, match="not initialized"):
                getattr(eng, name)

    async def test_initialize(self, engine, mainnet) -> None:
        assert engine.is_initialized
        assert engine.cache.is_connected
        assert engine.indexer.is_connected
        assert engine.indexer.base_url == mainnet.backend_url
        assert engine.networks.get_default_network() == mainnet
        assert isinstance(engine.transactions, TransactionRepository)

    async def test_double_initialize_raises(self, engine) -> None:
        with pytest.raises(RuntimeError, match="already initialized"):
            await engine.initialize()

    async def test_close_idempotent(self, app_config, signer) -> None:
        eng = WalletEngine(app_config, signer)
        await eng.initialize()
        networks = eng.networks
        await eng.close()
        await eng.close()
        assert eng.is_initialized is False
        assert networks.subscriber_count == 0


class TestWiring:
    async def test_network_switch_retargets_indexer(self, engine, kovan) -> None:
        engine.networks.set_default_network(kovan.name)
        assert engine.indexer.base_url == kovan.backend_url

    async def test_history_read_through(self, engine, kovan) -> None:
        hosts = []

        def handler(request: httpx.Request) -> httpx.Response:
            hosts.append(request.url.host)
            return httpx.Response(200, json={"docs": [{"hash": "0xAA", "value": "100"}]})

        engine.indexer._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        wallet = Wallet("0x" + "ab" * 20)

        first = await engine.transactions.fetch_transactions(wallet)
        second = await engine.transactions.fetch_transactions(wallet)
        assert first == second
        assert hosts == ["indexer.mainnet.test"]

        engine.networks.set_default_network(kovan.name)
        await engine.transactions.fetch_transactions(wallet)
        assert hosts == ["indexer.mainnet.test", "indexer.kovan.test"]
