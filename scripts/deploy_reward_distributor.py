"""
Deploy the reward distributor

RewardDistributor(token, signer) pays out governance tokens against
claims signed off-chain by the signer derived from SIGNER_MNEMONIC.
"""

import sys

from deployment.address_book import AddressBook
from deployment.contracts import ContractDeployer
from deployment.gas import get_gas_price
from deployment.runner import base_parser, prepare, run
from deployment.signers import account_from_env


def main(argv=None):
    args = base_parser(__doc__.strip().splitlines()[0]).parse_args(argv)
    ctx, deployer_signer = prepare(args)

    book = AddressBook.load()
    token_address = book.get(ctx.name, "GovernanceTokenProxy")

    signer_address = account_from_env("SIGNER_MNEMONIC").address
    print("Signer address:", signer_address)

    deployer = ContractDeployer(ctx, deployer_signer, gas_price=get_gas_price(ctx.w3, args.gas_price))
    distributor = deployer.deploy("RewardDistributor", token_address, signer_address)
    print(f"RewardDistributor: {distributor.address}")

    book.update(ctx.name, {"RewardDistributor": distributor.address})
    return distributor.address


if __name__ == "__main__":
    sys.exit(run(main))
