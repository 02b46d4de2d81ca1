# infrastructure/rpc.py
"""
Centralized RPC configuration.
Resolves a Web3 connection per network name.
"""
from typing import Dict, Optional

from web3 import Web3

from .config import get_config
from .errors import ConfigurationError


def get_rpc_url(network: str) -> str:
    """Get the RPC URL configured for a network."""
    url = get_config().rpc_url(network)
    if not url:
        raise ConfigurationError(
            f"No RPC URL configured for {network.upper()}; set {network.upper()}_RPC_URL",
            setting=f"{network.upper()}_RPC_URL",
        )
    return url


def get_web3(network: str, rpc_url: Optional[str] = None) -> Web3:
    """Get a Web3 instance for a network."""
    url = rpc_url or get_rpc_url(network)
    timeout = get_config().network.request_timeout
    return Web3(Web3.HTTPProvider(url, request_kwargs={"timeout": timeout}))


# Cached instances keyed by network
_connections: Dict[str, Web3] = {}


def get_w3(network: str) -> Web3:
    """Get cached Web3 instance (lazy initialization)."""
    key = network.upper()
    if key not in _connections:
        _connections[key] = get_web3(key)
    return _connections[key]


def clear_connections():
    _connections.clear()
