"""
Configuration Management for the APY Ops toolkit
Environment-based configuration with secrets handling

Features:
- .env loading
- Per-network RPC and explorer settings
- Gas and receipt polling settings
- Secrets management (mnemonics, private keys, API keys)
- Dynamic reload
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional
from enum import Enum

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("Config")


class Network(str, Enum):
    MAINNET = "MAINNET"
    RINKEBY = "RINKEBY"
    GOERLI = "GOERLI"
    KOVAN = "KOVAN"
    LOCALHOST = "LOCALHOST"
    TESTNET = "TESTNET"


# Local networks are mainnet forks
LOCAL_NETWORKS = {Network.LOCALHOST.value, Network.TESTNET.value}

# Networks where deployments get verified on Etherscan
VERIFIABLE_NETWORKS = {Network.MAINNET.value, Network.KOVAN.value}


@dataclass
class NetworkConfig:
    """Network configuration"""
    default_network: str = Network.LOCALHOST.value

    # RPC endpoints
    rpc_urls: Dict[str, str] = field(default_factory=lambda: {
        "LOCALHOST": "http://127.0.0.1:8545",
        "TESTNET": "http://127.0.0.1:8545",
    })

    # Block explorers (transaction links in status output)
    explorer_urls: Dict[str, str] = field(default_factory=lambda: {
        "MAINNET": "https://etherscan.io",
        "KOVAN": "https://kovan.etherscan.io",
        "RINKEBY": "https://rinkeby.etherscan.io",
        "GOERLI": "https://goerli.etherscan.io",
    })

    request_timeout: int = 60


@dataclass
class GasConfig:
    """Gas and receipt settings"""
    gas_station_url: str = "https://ethgasstation.info/api/ethgasAPI.json"
    gas_station_timeout: int = 10
    gas_buffer_percent: int = 20

    receipt_timeout: int = 300
    poll_interval: float = 1.0

    # Confirmations to wait before submitting for verification
    verify_confirmations: int = 5


@dataclass
class PathsConfig:
    """Filesystem locations"""
    address_book: str = "deployed_addresses.json"
    artifacts_dir: str = "artifacts"
    factory_addresses: str = "scripts/deployment-factory-addresses.json"


@dataclass
class ExplorerConfig:
    """Etherscan verification API"""
    api_url: str = "https://api.etherscan.io/v2/api"
    compiler_version: str = "v0.6.11+commit.5ef660b1"
    optimization_runs: int = 999999


@dataclass
class ToolkitConfig:
    """Main toolkit configuration"""
    network: NetworkConfig = field(default_factory=NetworkConfig)
    gas: GasConfig = field(default_factory=GasConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    explorer: ExplorerConfig = field(default_factory=ExplorerConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ToolkitConfig":
        """Create configuration from environment variables"""
        config = cls(log_level=os.environ.get("LOG_LEVEL", "INFO").upper())

        # HARDHAT_NETWORK kept for parity with the node tooling
        default_network = (
            os.environ.get("NETWORK")
            or os.environ.get("HARDHAT_NETWORK")
            or Network.LOCALHOST.value
        )
        config.network.default_network = default_network.upper()

        # <NETWORK>_RPC_URL overrides
        for network in Network:
            url = os.environ.get(f"{network.value}_RPC_URL")
            if url:
                config.network.rpc_urls[network.value] = url

        config.gas = GasConfig(
            gas_station_url=os.environ.get("GAS_STATION_URL", GasConfig.gas_station_url),
            gas_buffer_percent=int(os.environ.get("GAS_BUFFER_PERCENT", "20")),
            receipt_timeout=int(os.environ.get("RECEIPT_TIMEOUT", "300")),
            poll_interval=float(os.environ.get("RECEIPT_POLL_INTERVAL", "1.0")),
            verify_confirmations=int(os.environ.get("VERIFY_CONFIRMATIONS", "5")),
        )

        config.paths = PathsConfig(
            address_book=os.environ.get("ADDRESS_BOOK_PATH", PathsConfig.address_book),
            artifacts_dir=os.environ.get("ARTIFACTS_DIR", PathsConfig.artifacts_dir),
            factory_addresses=os.environ.get(
                "FACTORY_ADDRESSES_PATH", PathsConfig.factory_addresses
            ),
        )

        config.explorer = ExplorerConfig(
            api_url=os.environ.get("ETHERSCAN_API_URL", ExplorerConfig.api_url),
            compiler_version=os.environ.get("SOLC_VERSION", ExplorerConfig.compiler_version),
            optimization_runs=int(os.environ.get("SOLC_RUNS", "999999")),
        )

        return config

    def rpc_url(self, network: str) -> Optional[str]:
        return self.network.rpc_urls.get(network.upper())

    def explorer_url(self, network: str) -> Optional[str]:
        return self.network.explorer_urls.get(network.upper())

    def to_dict(self) -> Dict:
        """Convert to dictionary (hiding secrets)"""
        def sanitize(obj):
            if isinstance(obj, dict):
                return {
                    k: sanitize(v) for k, v in obj.items()
                    if "key" not in k.lower() and "mnemonic" not in k.lower()
                }
            elif hasattr(obj, '__dataclass_fields__'):
                return sanitize({k: getattr(obj, k) for k in obj.__dataclass_fields__})
            elif isinstance(obj, Enum):
                return obj.value
            else:
                return obj

        return sanitize(self)


# ============================================
# SECRETS MANAGEMENT
# ============================================

SECRET_KEYS = [
    "MNEMONIC",
    "SIGNER_MNEMONIC",
    "MANAGER_MNEMONIC",
    "TOKEN_MNEMONIC",
    "STAKING_MNEMONIC",
    "ALLOCATION_REGISTRY_MNEMONIC",
    "DEPLOYER_PRIVATE_KEY",
    "SIGNER_PRIVATE_KEY",
    "ETHERSCAN_API_KEY",
]


class SecretsManager:
    """
    Holds mnemonics, private keys and API keys.
    Values are never logged or serialized.
    """

    def __init__(self):
        self._secrets: Dict[str, str] = {}
        self._load_from_env()

    def _load_from_env(self):
        """Load secrets from environment variables"""
        for key in SECRET_KEYS:
            value = os.environ.get(key)
            if value:
                self._secrets[key] = value

    def get(self, key: str, default: str = None) -> Optional[str]:
        """Get a secret value"""
        return self._secrets.get(key, default)

    def set(self, key: str, value: str):
        """Set a secret value (runtime only)"""
        self._secrets[key] = value

    def has(self, key: str) -> bool:
        """Check if secret exists"""
        return key in self._secrets

    def __repr__(self) -> str:
        return f"SecretsManager(keys={sorted(self._secrets)})"


# ============================================
# GLOBAL INSTANCES
# ============================================

config = ToolkitConfig.from_env()
secrets = SecretsManager()

logger.debug(f"Configuration loaded, default network: {config.network.default_network}")


def get_config() -> ToolkitConfig:
    """Get the global configuration"""
    return config


def get_secrets() -> SecretsManager:
    """Get the secrets manager"""
    return secrets


def reload_config():
    """Reload configuration and secrets from environment"""
    global config, secrets
    config = ToolkitConfig.from_env()
    secrets = SecretsManager()
    logger.info("Configuration reloaded")
    return config
