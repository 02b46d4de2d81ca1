"""
Verify address-book contracts on Etherscan
Uses Standard JSON Input format from the latest compiler build-info

Usage:
    python -m scripts.verify_contracts --network KOVAN GenericExecutor
    python -m scripts.verify_contracts --network MAINNET RewardDistributor \\
        --constructor-args args.json

args.json maps contract names to constructor argument lists:
    {"RewardDistributor": ["0x...token", "0x...signer"]}
"""
import json
import sys
import time

from infrastructure.config import VERIFIABLE_NETWORKS
from infrastructure.errors import ValidationError
from deployment.address_book import AddressBook
from deployment.artifacts import get_artifacts
from deployment.network import connect
from deployment.runner import base_parser, print_network, run
from deployment.verification import check_verification_status, verify_contract

STATUS_POLL_SECONDS = 5
STATUS_MAX_POLLS = 12


def load_constructor_args(path):
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must map contract names to argument lists")
    return data


def wait_for_verdict(network: str, guid: str, chain_id: int) -> str:
    """Poll until Etherscan stops reporting the submission as queued."""
    status = ""
    for _ in range(STATUS_MAX_POLLS):
        time.sleep(STATUS_POLL_SECONDS)
        status = check_verification_status(network, guid, chain_id)
        if "pending" not in status.lower():
            break
    return status


def main(argv=None):
    parser = base_parser("Verify address-book contracts on Etherscan")
    parser.add_argument("names", nargs="+", help="Address-book contract names")
    parser.add_argument("--constructor-args", dest="constructor_args", default=None)
    parser.add_argument("--artifact", action="append", default=[], metavar="NAME=ARTIFACT",
                        help="Artifact to use for a book entry whose name differs")
    parser.add_argument("--no-wait", dest="wait", action="store_false")
    args = parser.parse_args(argv)

    ctx = connect(args.network)
    print_network(ctx)
    if ctx.name not in VERIFIABLE_NETWORKS:
        raise ValidationError(f"Etherscan verification is not available on {ctx.name}")

    print("=" * 50)
    print("🔐 Contract Verification")
    print("=" * 50)

    book = AddressBook.load()
    artifacts = get_artifacts()
    build_info = artifacts.latest_build_info()
    if not build_info:
        raise ValidationError("No build-info files found, compile the contracts first")

    overrides = dict(item.split("=", 1) for item in args.artifact)
    constructor_args = load_constructor_args(args.constructor_args)

    results = {}
    for name in args.names:
        address = book.get(ctx.name, name)
        artifact = artifacts.get(overrides.get(name, name))
        guid = verify_contract(
            ctx.name, artifact, address, constructor_args.get(name, []), build_info, chain_id=ctx.chain_id
        )
        if guid and args.wait:
            status = wait_for_verdict(ctx.name, guid, ctx.chain_id)
            print(f"  {name}: {status}")
        results[name] = guid

    print("\n" + "=" * 50)
    print("📋 Check status at:")
    for name in results:
        print(f"  {name}: {ctx.address_url(book.get(ctx.name, name))}#code")
    return results


if __name__ == "__main__":
    sys.exit(run(main, success_message="Verification submitted."))
