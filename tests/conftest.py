"""
Pytest Configuration for APY Ops Tests

Run all tests: python -m pytest tests/ -v
Run unit tests only: python -m pytest tests/ -v -m "not integration"
Run integration tests: FORK_RPC_URL=http://127.0.0.1:8545 ARTIFACTS_DIR=artifacts \
    python -m pytest tests/ -v -m integration
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from infrastructure.config import SECRET_KEYS, reload_config
from deployment.network import NetworkContext


# Hardhat/Anvil default accounts
TEST_MNEMONIC = "test test test test test test test test test test test junk"
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"


# =============================================================================
# FIXTURES - Shared across all test files
# =============================================================================

@pytest.fixture
def test_addresses():
    """Standard test addresses"""
    return {
        "deployer": "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
        "second": "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
        "DAI": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
        "USDC": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "USDT": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
        "token": "0x5FbDB2315678afecb367f032d93F642f64180aa3",
        "distributor": "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512",
    }


@pytest.fixture
def test_mnemonic():
    return TEST_MNEMONIC


@pytest.fixture
def toolkit_env(monkeypatch, tmp_path):
    """
    Clean environment for config-dependent code.

    Secrets from a developer's .env are removed and file paths point
    into tmp_path. Returns a setter that updates the environment and
    reloads the configuration.
    """
    for key in SECRET_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("NETWORK", raising=False)
    monkeypatch.delenv("HARDHAT_NETWORK", raising=False)
    monkeypatch.setenv("ADDRESS_BOOK_PATH", str(tmp_path / "deployed_addresses.json"))
    monkeypatch.setenv("ARTIFACTS_DIR", str(tmp_path / "artifacts"))
    monkeypatch.setenv("FACTORY_ADDRESSES_PATH", str(tmp_path / "factory-addresses.json"))
    reload_config()

    def set_env(**values):
        for key, value in values.items():
            monkeypatch.setenv(key, str(value))
        return reload_config()

    yield set_env

    monkeypatch.undo()
    reload_config()


@pytest.fixture
def mock_w3():
    """Web3 double with a mainnet-fork chain id"""
    w3 = MagicMock()
    w3.is_connected.return_value = True
    w3.eth.chain_id = 1
    w3.eth.gas_price = 20 * 10**9
    w3.eth.get_transaction_count.return_value = 0
    return w3


@pytest.fixture
def mock_ctx(mock_w3):
    """Local fork context"""
    return NetworkContext(name="LOCALHOST", w3=mock_w3, chain_id=1)


@pytest.fixture
def mainnet_ctx(mock_w3):
    return NetworkContext(name="MAINNET", w3=mock_w3, chain_id=1, explorer_url="https://etherscan.io")


@pytest.fixture
def success_receipt():
    return {
        "status": 1,
        "blockNumber": 100,
        "gasUsed": 21000,
        "contractAddress": "0x5fbdb2315678afecb367f032d93f642f64180aa3",
    }


# =============================================================================
# MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (need a forked node and artifacts)"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
