"""
APY Ops Infrastructure Module
Configuration, errors and RPC connections shared by the toolkit
"""

from .errors import (
    ToolkitError,
    ValidationError,
    NotFoundError,
    ConfigurationError,
    ExternalAPIError,
    BlockchainError,
    TransactionFailedError,
    ErrorCode,
    retry_sync,
)

from .config import (
    ToolkitConfig,
    Network,
    LOCAL_NETWORKS,
    VERIFIABLE_NETWORKS,
    SecretsManager,
    get_config,
    get_secrets,
    reload_config,
)

from .rpc import (
    get_rpc_url,
    get_web3,
    get_w3,
)

__all__ = [
    # Errors
    "ToolkitError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "ExternalAPIError",
    "BlockchainError",
    "TransactionFailedError",
    "ErrorCode",
    "retry_sync",

    # Config
    "ToolkitConfig",
    "Network",
    "LOCAL_NETWORKS",
    "VERIFIABLE_NETWORKS",
    "SecretsManager",
    "get_config",
    "get_secrets",
    "reload_config",

    # RPC
    "get_rpc_url",
    "get_web3",
    "get_w3",
]
