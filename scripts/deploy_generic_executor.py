"""
Deploy the generic executor with the manager deployer key

Public networks get the contract verified on Etherscan once the
deployment has enough confirmations.
"""

import sys

from deployment.address_book import AddressBook
from deployment.contracts import ContractDeployer
from deployment.gas import get_gas_price
from deployment.runner import base_parser, prepare, print_tx, run
from deployment.verification import verify_deployment


def main(argv=None):
    args = base_parser(__doc__.strip().splitlines()[0]).parse_args(argv)
    ctx, signer = prepare(args, signer_env="MANAGER_MNEMONIC")

    print("Deploying generic executor ...")
    print("")
    deployer = ContractDeployer(ctx, signer, gas_price=get_gas_price(ctx.w3, args.gas_price))
    executor = deployer.deploy("GenericExecutor")
    print_tx(ctx, "Deploy", executor.tx_hash)
    print("Generic Executor", executor.address)
    print("")

    AddressBook.load().update(ctx.name, {"GenericExecutor": executor.address})

    verify_deployment(ctx, executor)
    return executor.address


if __name__ == "__main__":
    sys.exit(run(main, success_message="Executor deployment successful."))
