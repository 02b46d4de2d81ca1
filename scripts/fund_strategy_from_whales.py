"""
Fund the demo strategy with stablecoins taken from whales

Fork-only. Looks up the strategy registered on the pool manager under
"curve_y" and moves 100k of each pool stablecoin into it.
"""

import sys

from infrastructure.errors import ValidationError
from deployment.address_book import AddressBook
from deployment.constants import STABLECOIN_SYMBOLS, get_stablecoin_address, get_whale_address
from deployment.contracts import ContractDeployer
from deployment.devchain import acquire_token
from deployment.runner import base_parser, prepare, print_done, run
from deployment.units import bytes32, token_amount

STRATEGY_ID = "curve_y"
FUNDING_AMOUNT = "100000"


def main(argv=None):
    parser = base_parser(__doc__.strip().splitlines()[0])
    parser.add_argument("--strategy-id", dest="strategy_id", default=STRATEGY_ID)
    parser.add_argument("--amount", default=FUNDING_AMOUNT, help="Tokens of each stablecoin")
    args = parser.parse_args(argv)
    ctx, signer = prepare(args)

    if not ctx.is_local:
        raise ValidationError(f"Whale funding needs a local fork, not {ctx.name}")

    deployer = ContractDeployer(ctx, signer)
    manager = deployer.attach("PoolManager", AddressBook.load().get(ctx.name, "PoolManagerProxy"))
    strategy_address = manager.functions.getStrategy(bytes32(args.strategy_id)).call()
    print("Strategy address:", strategy_address)
    print("")

    print("Acquire extra funds for testing ...")
    balances = {}
    for symbol in STABLECOIN_SYMBOLS:
        token = deployer.erc20(get_stablecoin_address(symbol, ctx.name))
        amount = token_amount(args.amount, token.functions.decimals().call())
        balances[symbol] = acquire_token(ctx, get_whale_address(symbol), strategy_address, token, amount)
        print(f"{symbol} balance: {balances[symbol]}")

    print_done()
    return balances


if __name__ == "__main__":
    sys.exit(run(main, success_message="Execution successful."))
