"""Tests for the configuration system."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from tx_wallet.config.settings import (
    AppConfig,
    CacheConfig,
    CacheEngine,
    IndexerConfig,
    NetworkConfig,
    RPCConfig,
    _load_yaml,
)

if TYPE_CHECKING:
    from pathlib import Path

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    """Verify all default values are correct."""

    def test_cache_defaults(self) -> None:
        cfg = CacheConfig()
        assert cfg.engine == CacheEngine.MEMORY
        assert cfg.url == "redis://localhost:6379/0"
        assert cfg.max_connections == 10
        assert cfg.max_size == 10_000
        assert cfg.ttl_seconds == 300

    def test_indexer_defaults(self) -> None:
        cfg = IndexerConfig()
        assert cfg.timeout == 30.0
        assert cfg.limit == 50

    def test_rpc_defaults(self) -> None:
        assert RPCConfig().timeout == 30.0

    def test_app_defaults(self) -> None:
        cfg = AppConfig()
        assert cfg.debug is False
        assert cfg.default_network == "Ethereum"
        names = [n.name for n in cfg.networks]
        assert names == [
            "Ethereum",
            "Ethereum Classic",
            "POA Network",
            "Kovan (Test)",
            "Ropsten (Test)",
        ]

    def test_preset_chain_ids(self) -> None:
        chain_ids = {n.name: n.chain_id for n in AppConfig().networks}
        assert chain_ids["Ethereum"] == 1
        assert chain_ids["Ethereum Classic"] == 61
        assert chain_ids["Kovan (Test)"] == 42
        assert chain_ids["Ropsten (Test)"] == 3


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    def test_unknown_default_network(self) -> None:
        with pytest.raises(ValidationError, match="default_network"):
            AppConfig(default_network="Nope")

    def test_empty_network_list(self) -> None:
        with pytest.raises(ValidationError, match="At least one network"):
            AppConfig(networks=[])

    def test_invalid_cache_engine(self) -> None:
        with pytest.raises(ValidationError):
            CacheConfig(engine="memcached")

    def test_redis_requires_expiry(self) -> None:
        with pytest.raises(ValidationError, match="ttl_seconds must be positive"):
            CacheConfig(engine=CacheEngine.REDIS, ttl_seconds=0)

    def test_memory_allows_no_expiry(self) -> None:
        assert CacheConfig(engine=CacheEngine.MEMORY, ttl_seconds=0).ttl_seconds == 0

    def test_negative_ttl(self) -> None:
        with pytest.raises(ValidationError, match="negative"):
            CacheConfig(ttl_seconds=-1)

    def test_custom_network(self) -> None:
        cfg = AppConfig(
            networks=[
                NetworkConfig(
                    name="Local",
                    rpc_server_url="http://127.0.0.1:8545",
                    backend_url="http://127.0.0.1:8000",
                    chain_id=1337,
                )
            ],
            default_network="Local",
        )
        assert cfg.networks[0].symbol == "ETH"
        assert cfg.networks[0].is_main_network is False


# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------


class TestEnvironment:
    def test_top_level_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TXWALLET_DEBUG", "true")
        monkeypatch.setenv("TXWALLET_DEFAULT_NETWORK", "Kovan (Test)")
        cfg = AppConfig()
        assert cfg.debug is True
        assert cfg.default_network == "Kovan (Test)"

    def test_nested_cache_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TXWALLET_CACHE__ENGINE", "redis")
        monkeypatch.setenv("TXWALLET_CACHE__TTL_SECONDS", "600")
        cfg = AppConfig()
        assert cfg.cache.engine == CacheEngine.REDIS
        assert cfg.cache.ttl_seconds == 600

    def test_nested_rpc_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TXWALLET_RPC__TIMEOUT", "5")
        assert AppConfig().rpc.timeout == 5.0


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------


class TestYAML:
    """YAML config file loading."""

    def test_load_yaml_nonexistent(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_load_yaml_non_dict(self, tmp_path: Path) -> None:
        f = tmp_path / "list.yaml"
        f.write_text("- item1\n- item2\n")
        assert _load_yaml(f) == {}

    def test_from_yaml(self, tmp_path: Path) -> None:
        f = tmp_path / "app.yaml"
        f.write_text(
            textwrap.dedent("""\
                debug: true
                default_network: Local
                cache:
                  ttl_seconds: 30
                networks:
                  - name: Local
                    rpc_server_url: http://127.0.0.1:8545
                    backend_url: http://127.0.0.1:8000
                    chain_id: 1337
            """)
        )
        cfg = AppConfig.from_yaml(f)
        assert cfg.debug is True
        assert cfg.cache.ttl_seconds == 30
        assert cfg.default_network == "Local"
        assert cfg.networks[0].chain_id == 1337

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Env vars have higher priority than YAML values."""
        f = tmp_path / "app.yaml"
        f.write_text("debug: false\n")
        monkeypatch.setenv("TXWALLET_DEBUG", "true")
        assert AppConfig.from_yaml(f).debug is True
