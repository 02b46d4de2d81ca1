"""
Redeem the user's whole pool-token balance from one pool

Usage:
    NETWORK=LOCALHOST python -m scripts.user_withdraw --pool USDC
"""

import sys

from deployment.address_book import AddressBook
from deployment.constants import STABLECOIN_SYMBOLS
from deployment.contracts import ContractDeployer
from deployment.gas import get_gas_price
from deployment.runner import base_parser, prepare, print_done, run
from deployment.signers import signer_address
from deployment.transactions import transact

POOL_TOKEN_ARTIFACT = "PoolTokenV2"


def pool_proxy_name(symbol: str) -> str:
    return f"{symbol.upper()}_PoolTokenProxy"


def main(argv=None):
    parser = base_parser(__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--pool",
        default="DAI",
        type=str.upper,
        choices=STABLECOIN_SYMBOLS,
        help="Underlyer symbol of the pool to withdraw from",
    )
    args = parser.parse_args(argv)
    ctx, user = prepare(args, label="User")

    symbol = args.pool
    deployer = ContractDeployer(ctx, user)
    pool = deployer.attach(POOL_TOKEN_ARTIFACT, AddressBook.load().get(ctx.name, pool_proxy_name(symbol)))

    user_address = signer_address(user)
    apt_balance = pool.functions.balanceOf(user_address).call()
    print(f"{symbol} APT balance: {apt_balance}")

    amount = pool.functions.getUnderlyerAmount(apt_balance).call()
    print("")
    print(f"Withdrawing {amount} from {symbol} pool ...")
    print("")

    transact(ctx, pool.functions.redeem(apt_balance), user, gas_price=get_gas_price(ctx.w3, args.gas_price))
    print_done()
    return amount


if __name__ == "__main__":
    sys.exit(run(main, success_message="Execution successful."))
