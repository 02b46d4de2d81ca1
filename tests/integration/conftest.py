"""
Fixtures for contract tests against a forked mainnet node

Needs a running Hardhat or Anvil fork with its default unlocked
accounts, and compiled contract artifacts:

    FORK_RPC_URL=http://127.0.0.1:8545 ARTIFACTS_DIR=artifacts \
        python -m pytest tests/integration -v

Everything here is skipped when either is missing.
"""

import os
from pathlib import Path

import pytest

from infrastructure.rpc import get_web3
from deployment.artifacts import ArtifactStore
from deployment.contracts import ContractDeployer
from deployment.devchain import revert_to_snapshot, take_snapshot
from deployment.network import connect
from deployment.signers import node_accounts


@pytest.fixture(scope="session")
def fork_w3():
    url = os.environ.get("FORK_RPC_URL")
    if not url:
        pytest.skip("FORK_RPC_URL not set")

    w3 = get_web3("LOCALHOST", rpc_url=url)
    if not w3.is_connected():
        pytest.skip(f"No node reachable at {url}")
    return w3


@pytest.fixture(scope="session")
def artifact_store():
    root = os.environ.get("ARTIFACTS_DIR")
    if not root or not Path(root).is_dir():
        pytest.skip("ARTIFACTS_DIR not set or missing")
    return ArtifactStore(root)


@pytest.fixture(scope="session")
def fork_ctx(fork_w3):
    return connect("LOCALHOST", w3=fork_w3)


@pytest.fixture(scope="session")
def accounts(fork_w3):
    """Node-unlocked accounts: owner, admin, random user, random address"""
    unlocked = node_accounts(fork_w3)
    if len(unlocked) < 4:
        pytest.skip("Node exposes fewer than 4 unlocked accounts")
    return unlocked


@pytest.fixture(scope="session")
def owner(accounts):
    return accounts[0]


@pytest.fixture(scope="session")
def random_user(accounts):
    return accounts[2]


@pytest.fixture(scope="session")
def contract_deployer(fork_ctx, owner, artifact_store):
    return ContractDeployer(fork_ctx, owner, artifact_store)


@pytest.fixture(autouse=True)
def evm_snapshot(fork_w3):
    """Revert chain state after every test"""
    snapshot_id = take_snapshot(fork_w3)
    yield
    revert_to_snapshot(fork_w3, snapshot_id)
