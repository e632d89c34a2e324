"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``TXWALLET_``, nested via ``__``)
2. YAML config file (``config_path`` field or ``TXWALLET_CONFIG_PATH`` env var)
3. Defaults defined here
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Enums for validated choices
# ---------------------------------------------------------------------------


class CacheEngine(enum.StrEnum):
    """Supported cache backends."""

    MEMORY = "memory"
    REDIS = "redis"


# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class CacheConfig(BaseSettings):
    """Transaction cache settings."""

    model_config = SettingsConfigDict(
        env_prefix="TXWALLET_CACHE__",
        case_sensitive=False,
    )

    engine: CacheEngine = Field(
        default=CacheEngine.MEMORY,
        description="Cache backend: memory or redis",
    )
    url: str = "redis://localhost:6379/0"
    max_connections: int = 10
    max_size: int = 10_000
    ttl_seconds: int = 300

    @model_validator(mode="after")
    def _check_ttl(self) -> Self:
        """Redis entries left behind by a previous process only expire via TTL."""
        if self.ttl_seconds < 0:
            msg = "ttl_seconds must not be negative"
            raise ValueError(msg)
        if self.engine == CacheEngine.REDIS and self.ttl_seconds == 0:
            msg = "ttl_seconds must be positive with the redis cache engine"
            raise ValueError(msg)
        return self


class IndexerConfig(BaseSettings):
    """Transaction indexer (block explorer) client settings."""

    model_config = SettingsConfigDict(
        env_prefix="TXWALLET_INDEXER__",
        case_sensitive=False,
    )

    timeout: float = 30.0
    limit: int = 50


class RPCConfig(BaseSettings):
    """Ledger JSON-RPC client settings."""

    model_config = SettingsConfigDict(
        env_prefix="TXWALLET_RPC__",
        case_sensitive=False,
    )

    timeout: float = 30.0


class NetworkConfig(BaseModel):
    """A single ledger network definition."""

    name: str
    symbol: str = "ETH"
    rpc_server_url: str
    backend_url: str
    chain_id: int
    is_main_network: bool = False


def _default_networks() -> list[NetworkConfig]:
    return [
        NetworkConfig(
            name="Ethereum",
            symbol="ETH",
            rpc_server_url="https://mainnet.infura.io/llyrtzQ3YhkdESt2Fzrk",
            backend_url="https://api.trustwalletapp.com",
            chain_id=1,
            is_main_network=True,
        ),
        NetworkConfig(
            name="Ethereum Classic",
            symbol="ETC",
            rpc_server_url="https://mewapi.epool.io/",
            backend_url="https://classic.trustwalletapp.com",
            chain_id=61,
            is_main_network=True,
        ),
        NetworkConfig(
            name="POA Network",
            symbol="POA",
            rpc_server_url="https://core.poa.network",
            backend_url="https://poa.trustwalletapp.com",
            chain_id=99,
            is_main_network=False,
        ),
        NetworkConfig(
            name="Kovan (Test)",
            symbol="ETH",
            rpc_server_url="https://kovan.infura.io/llyrtzQ3YhkdESt2Fzrk",
            backend_url="https://kovan.trustwalletapp.com",
            chain_id=42,
            is_main_network=False,
        ),
        NetworkConfig(
            name="Ropsten (Test)",
            symbol="ETH",
            rpc_server_url="https://ropsten.infura.io/llyrtzQ3YhkdESt2Fzrk",
            backend_url="https://ropsten.trustwalletapp.com",
            chain_id=3,
            is_main_network=False,
        ),
    ]


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``TXWALLET_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="TXWALLET_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    config_path: str = ""

    cache: CacheConfig = Field(default_factory=CacheConfig)
    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
    rpc: RPCConfig = Field(default_factory=RPCConfig)
    networks: list[NetworkConfig] = Field(default_factory=_default_networks)
    default_network: str = "Ethereum"

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        # YAML values serve as defaults; env vars (already in *values*) win.
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                merged = {**val, **values[key]}
                values[key] = merged
        return values

    @model_validator(mode="after")
    def _check_default_network(self) -> Self:
        """Ensure ``default_network`` names one of the configured networks."""
        names = [n.name for n in self.networks]
        if not names:
            msg = "At least one network must be configured"
            raise ValueError(msg)
        if self.default_network not in names:
            msg = f"default_network {self.default_network!r} is not one of {names}"
            raise ValueError(msg)
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
