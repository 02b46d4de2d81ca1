"""
Development-chain helpers for mainnet forks

Impersonation, balance cheats, snapshots and time travel through the
node's non-standard RPC methods. Hardhat method names are tried first,
then Anvil's.
"""

import logging
from typing import Any, List

from web3 import Web3

from infrastructure.errors import BlockchainError

from .network import NetworkContext
from .signers import Signer
from .transactions import transact

logger = logging.getLogger("DevChain")

# JSON-RPC "method not found"
METHOD_NOT_FOUND = -32601

DEV_PREFIXES = ("hardhat", "anvil")

# ETH sent to an impersonated account so it can pay for gas
WHALE_GAS_FUNDING = Web3.to_wei(1, "ether")


def rpc_call(w3: Web3, method: str, params: List[Any] = None) -> Any:
    """Raw JSON-RPC call; error responses raise BlockchainError."""
    response = w3.provider.make_request(method, params or [])
    error = response.get("error")
    if error:
        message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
        raise BlockchainError("devchain", f"{method} failed: {message}")
    return response.get("result")


def _is_method_missing(response: dict) -> bool:
    error = response.get("error")
    if not isinstance(error, dict):
        return False
    message = str(error.get("message", "")).lower()
    return error.get("code") == METHOD_NOT_FOUND or "not found" in message or "not supported" in message


def dev_call(w3: Web3, suffix: str, params: List[Any] = None) -> Any:
    """Call hardhat_<suffix>, falling back to anvil_<suffix>."""
    for prefix in DEV_PREFIXES:
        method = f"{prefix}_{suffix}"
        response = w3.provider.make_request(method, params or [])
        if _is_method_missing(response):
            continue
        if response.get("error"):
            raise BlockchainError("devchain", f"{method} failed: {response['error']}")
        return response.get("result")
    raise BlockchainError("devchain", f"Node supports none of {[f'{p}_{suffix}' for p in DEV_PREFIXES]}")


# =============================================================================
# ACCOUNTS
# =============================================================================

def impersonate_account(w3: Web3, address: str) -> str:
    """Unlock an arbitrary address on the fork. Returns it as an address signer."""
    address = Web3.to_checksum_address(address)
    dev_call(w3, "impersonateAccount", [address])
    logger.debug(f"Impersonating {address}")
    return address


def stop_impersonating(w3: Web3, address: str) -> None:
    dev_call(w3, "stopImpersonatingAccount", [Web3.to_checksum_address(address)])


def set_balance(w3: Web3, address: str, balance_wei: int) -> None:
    dev_call(w3, "setBalance", [Web3.to_checksum_address(address), hex(int(balance_wei))])


def forcibly_send_eth(w3: Web3, to: str, amount_wei: int) -> int:
    """
    Credit ETH to any address, including contracts without a payable
    fallback. Returns the new balance.
    """
    to = Web3.to_checksum_address(to)
    new_balance = w3.eth.get_balance(to) + int(amount_wei)
    set_balance(w3, to, new_balance)
    return new_balance


def acquire_token(
    ctx: NetworkContext,
    fund_account: str,
    receiver: str,
    token,
    amount: int,
) -> int:
    """
    Move tokens out of a whale into the receiver.

    The whale is impersonated and topped up with ETH for gas first.
    Returns the receiver's token balance afterwards.
    """
    whale: Signer = impersonate_account(ctx.w3, fund_account)
    try:
        if ctx.w3.eth.get_balance(whale) < WHALE_GAS_FUNDING:
            forcibly_send_eth(ctx.w3, whale, WHALE_GAS_FUNDING)
        transact(ctx, token.functions.transfer(Web3.to_checksum_address(receiver), int(amount)), whale)
    finally:
        stop_impersonating(ctx.w3, whale)

    balance = token.functions.balanceOf(Web3.to_checksum_address(receiver)).call()
    logger.info(f"{token.address} balance of {receiver}: {balance}")
    return balance


# =============================================================================
# SNAPSHOTS AND TIME
# =============================================================================

def take_snapshot(w3: Web3) -> str:
    return rpc_call(w3, "evm_snapshot")


def revert_to_snapshot(w3: Web3, snapshot_id: str) -> bool:
    return bool(rpc_call(w3, "evm_revert", [snapshot_id]))


def increase_time(w3: Web3, seconds: int) -> None:
    rpc_call(w3, "evm_increaseTime", [int(seconds)])


def mine_block(w3: Web3) -> None:
    rpc_call(w3, "evm_mine")
