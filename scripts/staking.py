"""
Fund the liquidity-mining staking contracts for a new reward period

Transfers reward tokens from the token deployer to the Balancer and
Uniswap staking pools, then has the staking deployer call
notifyRewardAmount on both. With --dry-run only the ETH cost of each
step is estimated.
"""

import sys

from deployment.address_book import AddressBook
from deployment.contracts import ContractDeployer
from deployment.gas import get_gas_price
from deployment.network import connect
from deployment.runner import base_parser, print_network, print_tx, run
from deployment.signers import account_from_env
from deployment.transactions import estimate_cost, send_transaction, wait_for_receipt
from deployment.units import erc20, format_wei

# deployed by hand, not tracked in the address book
BALANCER_STAKING_ADDRESS = "0xFe82ea0Ef14DfdAcd5dB1D49F563497A1a751bA1"
UNISWAP_STAKING_ADDRESS = "0x0310DEE97b42063BbB46d02a674727C13eb79cFD"

DEFAULT_REWARD_AMOUNT = "35000"

# Balancer pool and Unipool share the reward-notification entrypoint
STAKING_ABI = [
    {
        "inputs": [{"name": "reward", "type": "uint256"}],
        "name": "notifyRewardAmount",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
]


def print_dry_run(ctx, label: str, calls, signer, gas_price: int) -> int:
    cost = estimate_cost(ctx, calls, signer, gas_price)
    print("Estimated ETH cost:", format_wei(cost))
    print(f"Current ETH balance for {label}:", format_wei(ctx.balance(signer.address)))
    print("")
    return cost


def send_all(ctx, calls, signer, gas_price: int):
    """Send every call before waiting so they can land in the same block."""
    tx_hashes = []
    for call in calls:
        tx_hash = send_transaction(ctx, call, signer, gas_price=gas_price)
        print_tx(ctx, "Etherscan", tx_hash)
        tx_hashes.append(tx_hash)
    return [wait_for_receipt(ctx, tx_hash) for tx_hash in tx_hashes]


def main(argv=None):
    parser = base_parser(__doc__.strip().splitlines()[0], dry_run=True)
    parser.add_argument("--amount", default=DEFAULT_REWARD_AMOUNT, help="Reward tokens per staking pool")
    args = parser.parse_args(argv)

    ctx = connect(args.network)
    print_network(ctx)

    token_deployer = account_from_env("TOKEN_MNEMONIC")
    print("APY Token deployer:", token_deployer.address)
    staking_deployer = account_from_env("STAKING_MNEMONIC")
    print("Staking deployer:", staking_deployer.address)
    print("")

    amount = erc20(args.amount, 18)
    deployer = ContractDeployer(ctx, token_deployer)
    token = deployer.attach("GovernanceToken", AddressBook.load().get(ctx.name, "GovernanceTokenProxy"))
    pools = [
        ("Balancerpool", deployer.contract_at(STAKING_ABI, BALANCER_STAKING_ADDRESS)),
        ("Unipool", deployer.contract_at(STAKING_ABI, UNISWAP_STAKING_ADDRESS)),
    ]

    gas_price = get_gas_price(ctx.w3, args.gas_price)
    transfers = [token.functions.transfer(pool.address, amount) for _, pool in pools]
    if args.dry_run:
        print("")
        print("Doing a dry run ...")
        print("")
        print_dry_run(ctx, "token deployer", transfers, token_deployer, gas_price)
    else:
        send_all(ctx, transfers, token_deployer, gas_price)
        for _, pool in pools:
            print(f"Transferred {amount} tokens to {pool.address}")
        print("")

    # re-read, the price may have moved while the transfers were mined
    gas_price = get_gas_price(ctx.w3, args.gas_price)
    notifications = [pool.functions.notifyRewardAmount(amount) for _, pool in pools]
    if args.dry_run:
        print_dry_run(ctx, "staking deployer", notifications, staking_deployer, gas_price)
    else:
        send_all(ctx, notifications, staking_deployer, gas_price)
        for label, _ in pools:
            print(f"Called `notifyRewardAmount` on {label}.")
    return amount


if __name__ == "__main__":
    sys.exit(run(main, success_message="Staking contracts updated successfully."))
