"""
APY Ops Deployment Module
Address book, registries, and the deploy/send/sign primitives used by the scripts
"""

from .address_book import (
    AddressBook,
    get_deployed_address,
    update_deploy_jsons,
)

from .constants import (
    CHAIN_IDS,
    WHALE_POOLS,
    AGG_MAP,
    TOKEN_AGG_MAP,
    CONTRACT_NAMES,
    STABLECOIN_SYMBOLS,
    get_chain_id,
    get_stablecoin_address,
    get_aggregator_address,
    get_whale_address,
)

from .units import (
    ZERO_ADDRESS,
    FAKE_ADDRESS,
    ANOTHER_FAKE_ADDRESS,
    MAX_UINT256,
    token_amount,
    erc20,
    dai,
    usdc,
    undo_token_amount,
    format_wei,
    bytes32,
)

from .network import NetworkContext, connect
from .signers import Signer, resolve_signer, account_from_env, account_from_mnemonic, signer_address
from .gas import get_gas_price
from .transactions import (
    GasTally,
    build_transaction,
    send_transaction,
    wait_for_receipt,
    transact,
    estimate_cost,
)
from .artifacts import Artifact, ArtifactStore, get_artifacts
from .contracts import ContractDeployer, DeployedContract, ERC20_ABI
from .signatures import Signature, generate_reward_signature, recover_reward_signer

__all__ = [
    # Address book
    "AddressBook",
    "get_deployed_address",
    "update_deploy_jsons",

    # Registries
    "CHAIN_IDS",
    "WHALE_POOLS",
    "AGG_MAP",
    "TOKEN_AGG_MAP",
    "CONTRACT_NAMES",
    "STABLECOIN_SYMBOLS",
    "get_chain_id",
    "get_stablecoin_address",
    "get_aggregator_address",
    "get_whale_address",

    # Units
    "ZERO_ADDRESS",
    "FAKE_ADDRESS",
    "ANOTHER_FAKE_ADDRESS",
    "MAX_UINT256",
    "token_amount",
    "erc20",
    "dai",
    "usdc",
    "undo_token_amount",
    "format_wei",
    "bytes32",

    # Network and signers
    "NetworkContext",
    "connect",
    "Signer",
    "resolve_signer",
    "account_from_env",
    "account_from_mnemonic",
    "signer_address",

    # Transactions
    "get_gas_price",
    "GasTally",
    "build_transaction",
    "send_transaction",
    "wait_for_receipt",
    "transact",
    "estimate_cost",

    # Contracts
    "Artifact",
    "ArtifactStore",
    "get_artifacts",
    "ContractDeployer",
    "DeployedContract",
    "ERC20_ABI",

    # Signatures
    "Signature",
    "generate_reward_signature",
    "recover_reward_signer",
]
