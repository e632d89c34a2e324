"""NetworkRepository — holds the active network and notifies subscribers.

Exactly one network is current at a time. Switching it is a single
assignment, after which every subscriber is called synchronously, in
registration order, before ``set_default_network`` returns.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tx_wallet.errors.definitions import ErrUnknownNetwork
from tx_wallet.models.network import NetworkInfo

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from tx_wallet.config.settings import AppConfig

logger = logging.getLogger(__name__)


class NetworkRepository:
    """Registry of known networks with a current-network observer."""

    def __init__(self, networks: Iterable[NetworkInfo], default: str) -> None:
        """Initialize with the known networks.

        Args:
            networks: Available networks; names must be unique.
            default: Name of the initially selected network.

        Raises:
            WalletError: ``ErrUnknownNetwork`` if *default* is not among *networks*.
        """
        self._networks: dict[str, NetworkInfo] = {n.name: n for n in networks}
        if default not in self._networks:
            raise ErrUnknownNetwork
        self._current = self._networks[default]
        self._subscribers: list[Callable[[NetworkInfo], None]] = []

    @classmethod
    def from_config(cls, config: AppConfig) -> NetworkRepository:
        """Build the repository from the configured network list."""
        return cls(
            (NetworkInfo.from_config(n) for n in config.networks),
            default=config.default_network,
        )

    def get_default_network(self) -> NetworkInfo:
        """Snapshot of the currently selected network."""
        return self._current

    def get_available_networks(self) -> list[NetworkInfo]:
        return list(self._networks.values())

    def set_default_network(self, name: str) -> NetworkInfo:
        """Make *name* the current network and notify subscribers.

        Selecting the network that is already current is a no-op.

        Raises:
            WalletError: ``ErrUnknownNetwork`` for an unconfigured name.
        """
        network = self._networks.get(name)
        if network is None:
            raise ErrUnknownNetwork
        if network == self._current:
            return network

        self._current = network
        logger.info("Default network changed to %s (chain %d)", network.name, network.chain_id)
        for callback in list(self._subscribers):
            try:
                callback(network)
            except Exception:
                logger.exception("Network change subscriber %r failed", callback)
        return network

    def subscribe(self, callback: Callable[[NetworkInfo], None]) -> Callable[[], None]:
        """Register *callback* for network changes.

        Returns:
            An unsubscribe handle; calling it more than once is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
