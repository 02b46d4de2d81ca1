"""
Network resolution: which chain a script talks to, and how to link to it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from web3 import Web3

from infrastructure.config import LOCAL_NETWORKS, get_config
from infrastructure.errors import ConfigurationError
from infrastructure.rpc import get_web3

logger = logging.getLogger("Network")


@dataclass
class NetworkContext:
    """A connected network"""
    name: str
    w3: Web3
    chain_id: int
    explorer_url: Optional[str] = None

    @property
    def is_local(self) -> bool:
        return self.name in LOCAL_NETWORKS

    def tx_url(self, tx_hash) -> Optional[str]:
        """Explorer link for a transaction, None on local forks."""
        if not self.explorer_url or self.is_local:
            return None
        if not isinstance(tx_hash, str):
            tx_hash = Web3.to_hex(tx_hash)
        return f"{self.explorer_url}/tx/{tx_hash}"

    def address_url(self, address: str) -> Optional[str]:
        if not self.explorer_url or self.is_local:
            return None
        return f"{self.explorer_url}/address/{address}"

    def balance(self, address: str) -> int:
        return self.w3.eth.get_balance(Web3.to_checksum_address(address))


def connect(network: Optional[str] = None, w3: Optional[Web3] = None) -> NetworkContext:
    """
    Resolve a network name to a connected context.

    Args:
        network: Network name, case-insensitive. Defaults to NETWORK env var.
        w3: Pre-built Web3 instance (tests, forks started in-process)
    """
    cfg = get_config()
    name = (network or cfg.network.default_network).upper()

    if w3 is None:
        w3 = get_web3(name)

    if not w3.is_connected():
        raise ConfigurationError(
            f"Cannot connect to {name} node at {cfg.rpc_url(name)}",
            setting=f"{name}_RPC_URL",
        )

    chain_id = w3.eth.chain_id
    logger.debug(f"Connected to {name} (chain id {chain_id})")

    return NetworkContext(
        name=name,
        w3=w3,
        chain_id=chain_id,
        explorer_url=cfg.explorer_url(name),
    )
