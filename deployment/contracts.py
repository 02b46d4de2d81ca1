"""
Contract deployment and attachment by name

Usage:
    deployer = ContractDeployer(ctx, signer)
    admin = deployer.deploy("ProxyAdmin")
    proxy = deployer.deploy("GovernanceTokenProxy", logic.address, admin.address, supply)
    token = deployer.attach("GovernanceToken", proxy.address)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from web3 import Web3
from web3.contract import Contract

from infrastructure.errors import ValidationError

from .artifacts import ArtifactStore, get_artifacts
from .network import NetworkContext
from .signers import Signer
from .transactions import send_transaction, wait_for_receipt

logger = logging.getLogger("Contracts")

# Minimal ERC-20 ABI for tokens without a local artifact
ERC20_ABI = [
    {
        "constant": True,
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"}
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "constant": False,
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"}
        ],
        "name": "transfer",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "constant": False,
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"}
        ],
        "name": "approve",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]


@dataclass
class DeployedContract:
    """Result of a deployment"""
    name: str
    address: str
    contract: Contract
    tx_hash: str
    receipt: Any
    constructor_args: tuple = ()

    @property
    def gas_used(self) -> int:
        return self.receipt["gasUsed"]

    @property
    def functions(self):
        return self.contract.functions


class ContractDeployer:
    """Deploys and attaches contracts from compiled artifacts."""

    def __init__(
        self,
        ctx: NetworkContext,
        signer: Signer,
        artifacts: Optional[ArtifactStore] = None,
        gas_price: Optional[int] = None,
    ):
        self.ctx = ctx
        self.signer = signer
        self.artifacts = artifacts or get_artifacts()
        self.gas_price = gas_price

    def factory(self, name: str):
        artifact = self.artifacts.get(name)
        if not artifact.is_deployable:
            raise ValidationError(f"{name} has no bytecode (interface or abstract contract)")
        return self.ctx.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    def deploy(self, name: str, *args, gas_price: Optional[int] = None, signer: Signer = None) -> DeployedContract:
        """Deploy a contract by name and wait for it to be mined."""
        factory = self.factory(name)
        constructor = factory.constructor(*args)

        tx_hash = send_transaction(
            self.ctx,
            constructor,
            signer or self.signer,
            gas_price=gas_price if gas_price is not None else self.gas_price,
        )
        receipt = wait_for_receipt(self.ctx, tx_hash)

        address = Web3.to_checksum_address(receipt["contractAddress"])
        logger.info(f"[{self.ctx.name}] {name} deployed at {address} ({receipt['gasUsed']} gas)")

        return DeployedContract(
            name=name,
            address=address,
            contract=self.attach(name, address),
            tx_hash=Web3.to_hex(tx_hash),
            receipt=receipt,
            constructor_args=args,
        )

    def attach(self, name: str, address: str) -> Contract:
        """Contract instance for a named artifact at an existing address."""
        return self.contract_at(self.artifacts.get(name).abi, address)

    def contract_at(self, abi: List[Dict], address: str) -> Contract:
        return self.ctx.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def erc20(self, address: str) -> Contract:
        return self.contract_at(ERC20_ABI, address)
