"""
Deploy a TVL price-feed aggregator on a mainnet fork

Deploys a FluxAggregator, funds it with LINK from a whale, and registers
a single oracle node. Run before any other deployment on a fresh fork
so the aggregator lands on the address the frontend expects.
"""

import sys

from infrastructure.errors import ConfigurationError
from deployment.address_book import AddressBook
from deployment.constants import LINK_ADDRESS, LINK_WHALE_ADDRESS
from deployment.contracts import ContractDeployer
from deployment.devchain import acquire_token
from deployment.gas import get_gas_price
from deployment.runner import base_parser, prepare, run
from deployment.signers import resolve_signer, signer_address
from deployment.transactions import transact
from deployment.units import ZERO_ADDRESS, erc20

PAYMENT_AMOUNT = erc20("1", 18)  # LINK paid per oracle submission
ROUND_TIMEOUT = 100000  # seconds before an oracle may skip a round
MIN_SUBMISSION_VALUE = 0
MAX_SUBMISSION_VALUE = erc20("1", 20)
ANSWER_DECIMALS = 8
DESCRIPTION = "TVL aggregator"


def main(argv=None):
    parser = base_parser(__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--link-amount",
        dest="link_amount",
        default="100000",
        help="LINK to fund the aggregator with",
    )
    args = parser.parse_args(argv)
    ctx, signer = prepare(args)
    deployer_address = signer_address(signer)

    nonce = ctx.w3.eth.get_transaction_count(deployer_address)
    print("Deployer nonce (should be 0):", nonce)
    oracle_address = signer_address(resolve_signer(ctx.w3, index=1))
    if oracle_address == deployer_address:
        raise ConfigurationError(
            "Oracle node must differ from the deployer: set MNEMONIC or use a node with two accounts",
            setting="MNEMONIC",
        )
    print("Oracle address:", oracle_address)
    print("")

    print("Deploying ...")
    gas_price = get_gas_price(ctx.w3, args.gas_price)
    deployer = ContractDeployer(ctx, signer, gas_price=gas_price)
    aggregator = deployer.deploy(
        "FluxAggregator",
        LINK_ADDRESS,
        PAYMENT_AMOUNT,
        ROUND_TIMEOUT,
        ZERO_ADDRESS,  # validator
        MIN_SUBMISSION_VALUE,
        MAX_SUBMISSION_VALUE,
        ANSWER_DECIMALS,
        DESCRIPTION,
    )
    print("... done.")
    print("")
    print(f"LINK token: {LINK_ADDRESS}")
    print(f"FluxAggregator: {aggregator.address}")
    print("")

    # reserve must cover two rounds: 2 * oracles * payment amount
    print("Funding aggregator with LINK ...")
    link = deployer.erc20(LINK_ADDRESS)
    acquire_token(ctx, LINK_WHALE_ADDRESS, aggregator.address, link, erc20(args.link_amount, 18))
    transact(ctx, aggregator.functions.updateAvailableFunds(), signer, gas_price=gas_price)
    print("... done.")

    print("Registering oracle node ...")
    transact(
        ctx,
        aggregator.functions.changeOracles(
            [],  # oracles being removed
            [oracle_address],  # oracles being added
            [deployer_address],  # owners of oracles being added
            1,  # min submissions per round
            1,  # max submissions per round
            0,  # rounds to wait before an oracle can initiate a round
        ),
        signer,
        gas_price=gas_price,
    )
    print("... done.")

    AddressBook.load().update(ctx.name, {"TvlAggregator": aggregator.address})
    return aggregator.address


if __name__ == "__main__":
    sys.exit(run(main))
