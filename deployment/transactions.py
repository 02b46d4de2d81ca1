"""
Transaction submission - build, sign, send, and wait for the receipt

Works with contract function calls, contract constructors, and raw
transaction dicts. LocalAccount signers sign in-process; address
signers are sent through eth_sendTransaction and signed by the node.

Usage:
    receipt = transact(ctx, token.functions.transfer(to, amount), deployer)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted

from infrastructure.config import get_config
from infrastructure.errors import TransactionFailedError, ValidationError

from .network import NetworkContext
from .signers import Signer, signer_address

logger = logging.getLogger("Transactions")


@dataclass
class GasTally:
    """Running total of gas used across a multi-transaction script"""
    total: int = 0
    receipts: List[Any] = field(default_factory=list)

    def add(self, receipt) -> int:
        self.total += receipt["gasUsed"]
        self.receipts.append(receipt)
        return self.total


def _apply_buffer(gas: int) -> int:
    buffer = get_config().gas.gas_buffer_percent
    return int(gas * (100 + buffer) // 100)


def build_transaction(
    ctx: NetworkContext,
    call,
    signer: Signer,
    gas_price: Optional[int] = None,
    value: int = 0,
    gas: Optional[int] = None,
) -> Dict:
    """
    Fill sender, value, fee and gas fields.

    Gas is estimated by the node and padded by the configured buffer
    unless given explicitly.
    """
    sender = signer_address(signer)
    params: Dict[str, Any] = {"from": sender}
    if value:
        params["value"] = int(value)
    if gas_price is not None:
        params["gasPrice"] = int(gas_price)
    if gas is not None:
        params["gas"] = int(gas)

    estimated = gas is None
    if hasattr(call, "build_transaction"):
        tx = call.build_transaction(params)
    elif isinstance(call, dict):
        tx = {**params, **call}
        if "gas" in call:
            estimated = False
        elif "gas" not in tx:
            tx["gas"] = ctx.w3.eth.estimate_gas(tx)
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = ctx.w3.eth.gas_price
    else:
        raise ValidationError(f"Cannot build a transaction from {type(call).__name__}")

    if estimated:
        tx["gas"] = _apply_buffer(tx["gas"])
    return tx


def send_transaction(
    ctx: NetworkContext,
    call,
    signer: Signer,
    gas_price: Optional[int] = None,
    value: int = 0,
    gas: Optional[int] = None,
) -> HexBytes:
    """Submit a transaction and return its hash without waiting."""
    tx = build_transaction(ctx, call, signer, gas_price=gas_price, value=value, gas=gas)

    if isinstance(signer, LocalAccount):
        tx["nonce"] = ctx.w3.eth.get_transaction_count(signer.address, "pending")
        tx["chainId"] = ctx.chain_id
        signed = signer.sign_transaction(tx)
        tx_hash = ctx.w3.eth.send_raw_transaction(signed.raw_transaction)
    else:
        tx_hash = ctx.w3.eth.send_transaction(tx)

    url = ctx.tx_url(tx_hash)
    logger.info(f"[{ctx.name}] Sent {Web3.to_hex(tx_hash)}" + (f" ({url})" if url else ""))
    return HexBytes(tx_hash)


def wait_for_receipt(
    ctx: NetworkContext,
    tx_hash,
    confirmations: int = 1,
    timeout: Optional[float] = None,
):
    """
    Poll for the receipt, then for extra confirmations.

    Raises:
        TransactionFailedError: not mined in time, or reverted
    """
    gas_cfg = get_config().gas
    timeout = timeout if timeout is not None else gas_cfg.receipt_timeout
    hex_hash = Web3.to_hex(tx_hash)

    try:
        receipt = ctx.w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=gas_cfg.poll_interval
        )
    except TimeExhausted:
        raise TransactionFailedError(
            ctx.name, hex_hash, f"Transaction {hex_hash} not mined within {timeout}s"
        ) from None

    if receipt["status"] != 1:
        raise TransactionFailedError(
            ctx.name, hex_hash, f"Transaction {hex_hash} reverted", block_number=receipt["blockNumber"]
        )

    if confirmations > 1:
        target = receipt["blockNumber"] + confirmations - 1
        deadline = time.monotonic() + timeout
        while ctx.w3.eth.block_number < target:
            if time.monotonic() > deadline:
                raise TransactionFailedError(
                    ctx.name, hex_hash,
                    f"Transaction {hex_hash} did not reach {confirmations} confirmations"
                )
            time.sleep(gas_cfg.poll_interval)

    return receipt


def transact(
    ctx: NetworkContext,
    call,
    signer: Signer,
    gas_price: Optional[int] = None,
    value: int = 0,
    gas: Optional[int] = None,
    confirmations: int = 1,
):
    """Send and wait. Returns the successful receipt."""
    tx_hash = send_transaction(ctx, call, signer, gas_price=gas_price, value=value, gas=gas)
    return wait_for_receipt(ctx, tx_hash, confirmations=confirmations)


def estimate_cost(
    ctx: NetworkContext,
    calls: Iterable,
    signer: Signer,
    gas_price: int,
) -> int:
    """Dry run: total estimated gas for the calls times the gas price, in wei."""
    sender = signer_address(signer)
    total_gas = 0
    for call in calls:
        if hasattr(call, "estimate_gas"):
            total_gas += call.estimate_gas({"from": sender})
        else:
            total_gas += ctx.w3.eth.estimate_gas({"from": sender, **call})
    return total_gas * int(gas_price)
