"""
Shared scaffolding for the operational scripts

Every script: parse args, resolve network and signer, do its
transactions, print status, exit 0 on success and 1 on failure.
"""

import argparse
import logging
from typing import Callable, List, Optional, Tuple

from web3 import Web3

from infrastructure.errors import ToolkitError

from .network import NetworkContext, connect
from .signers import Signer, resolve_signer, signer_address
from .units import format_wei

logger = logging.getLogger("ScriptRunner")


def base_parser(description: str, dry_run: bool = False) -> argparse.ArgumentParser:
    """Options every script accepts."""
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--network",
        default=None,
        help="Network name (MAINNET, KOVAN, LOCALHOST, ...); defaults to NETWORK env var",
    )
    parser.add_argument(
        "--gas-price",
        dest="gas_price",
        type=float,
        default=None,
        help="Gas price in gwei; omitting uses the gas station value",
    )
    if dry_run:
        parser.add_argument(
            "--dry-run",
            dest="dry_run",
            action="store_true",
            help="Simulates transactions to estimate ETH cost",
        )
    return parser


def print_network(ctx: NetworkContext) -> None:
    print("")
    print(f"{ctx.name} selected")
    print("")


def print_account(ctx: NetworkContext, label: str, address: str, show_balance: bool = True) -> int:
    """Print an account line and, optionally, its ETH balance. Returns the balance in wei."""
    print(f"{label} address:", address)
    balance = 0
    if show_balance:
        balance = ctx.balance(address)
        print("ETH balance:", format_wei(balance))
    return balance


def prepare(args: argparse.Namespace, signer_env: Optional[str] = None, label: str = "Deployer") -> Tuple[NetworkContext, Signer]:
    """Connect, print the banner, resolve and print the signer."""
    ctx = connect(args.network)
    print_network(ctx)
    signer = resolve_signer(ctx.w3, signer_env)
    print_account(ctx, label, signer_address(signer))
    print("")
    return ctx, signer


def print_tx(ctx: NetworkContext, label: str, tx_hash) -> None:
    """Explorer link, or the bare hash on local networks. Accepts hex strings or bytes."""
    url = ctx.tx_url(tx_hash)
    if url is None and not isinstance(tx_hash, str):
        tx_hash = Web3.to_hex(tx_hash)
    print(f"{label}:", url or tx_hash)


def print_done() -> None:
    print("")
    print("√ ... done.")
    print("")


def run(
    main: Callable[[Optional[List[str]]], object],
    argv: Optional[List[str]] = None,
    success_message: str = "Deployment successful.",
) -> int:
    """
    Run a script's main and translate the outcome into an exit code.

    Usage:
        if __name__ == "__main__":
            sys.exit(run(main))
    """
    try:
        main(argv)
    except ToolkitError as e:
        logger.error(f"{e.code.value}: {e.message} {e.details or ''}".rstrip())
        print("")
        return 1
    except Exception:
        logger.exception("Script failed")
        print("")
        return 1

    print("")
    print(success_message)
    print("")
    return 0
