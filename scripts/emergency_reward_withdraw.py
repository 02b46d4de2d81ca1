"""
Emergency withdrawal of the reward distributor's token balance

Signs a claim for the distributor's whole balance in favour of the
recipient with the registered signer key, then submits it.
"""

import sys

from web3 import Web3

from deployment.address_book import AddressBook
from deployment.contracts import ContractDeployer
from deployment.gas import get_gas_price
from deployment.runner import base_parser, prepare, run
from deployment.signatures import generate_reward_signature
from deployment.signers import account_from_env
from deployment.transactions import transact
from deployment.units import format_wei


def main(argv=None):
    parser = base_parser(__doc__.strip().splitlines()[0])
    parser.add_argument("--recipient", required=True, help="Address receiving the withdrawn tokens")
    args = parser.parse_args(argv)
    ctx, sender = prepare(args)

    recipient = Web3.to_checksum_address(args.recipient)
    book = AddressBook.load()
    deployer = ContractDeployer(ctx, sender)
    token = deployer.attach("GovernanceToken", book.get(ctx.name, "GovernanceTokenProxy"))
    rewards = deployer.attach("RewardDistributor", book.get(ctx.name, "RewardDistributor"))

    balance = token.functions.balanceOf(rewards.address).call()
    print(f"Contract Balance: {format_wei(balance)} APY")

    nonce = rewards.functions.accountNonces(recipient).call()
    print(f"Recipient Nonce: {nonce}")
    print("Token:", token.address)
    print("Distributor:", rewards.address)
    print("Recipient:", recipient)

    signer_key = account_from_env("SIGNER_MNEMONIC").key
    signature = generate_reward_signature(
        signer_key,
        rewards.address,
        nonce,
        recipient,
        balance,
        ctx.chain_id,
    )

    transact(
        ctx,
        rewards.functions.claim((nonce, recipient, balance), signature.v, signature.r, signature.s),
        sender,
        gas_price=get_gas_price(ctx.w3, args.gas_price),
    )
    print("Funds Secured")
    return balance


if __name__ == "__main__":
    sys.exit(run(main, success_message="Withdrawal successful."))
