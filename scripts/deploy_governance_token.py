"""
Deploy the governance token behind an upgradeable proxy

Deploys ProxyAdmin, the GovernanceToken logic contract, and
GovernanceTokenProxy(logic, admin, totalSupply), then records all
three in the address book.

Run:
    NETWORK=kovan python -m scripts.deploy_governance_token
"""

import sys

from deployment.address_book import AddressBook
from deployment.contracts import ContractDeployer
from deployment.gas import get_gas_price
from deployment.runner import base_parser, prepare, run
from deployment.signers import signer_address
from deployment.units import erc20, format_wei

TOTAL_SUPPLY = erc20("100000000", 18)  # 100MM


def main(argv=None):
    args = base_parser(__doc__.strip().splitlines()[0]).parse_args(argv)
    ctx, signer = prepare(args)
    deployer_address = signer_address(signer)

    gas_price = get_gas_price(ctx.w3, args.gas_price)
    deployer = ContractDeployer(ctx, signer, gas_price=gas_price)

    proxy_admin = deployer.deploy("ProxyAdmin")
    print(f"ProxyAdmin: {proxy_admin.address}")

    logic = deployer.deploy("GovernanceToken")
    print(f"Implementation Logic: {logic.address}")

    proxy = deployer.deploy("GovernanceTokenProxy", logic.address, proxy_admin.address, TOTAL_SUPPLY)
    print(f"Proxy: {proxy.address}")

    AddressBook.load().update(ctx.name, {
        "GovernanceTokenProxyAdmin": proxy_admin.address,
        "GovernanceToken": logic.address,
        "GovernanceTokenProxy": proxy.address,
    })

    token = deployer.attach("GovernanceToken", proxy.address)
    decimals = token.functions.decimals().call()
    print("Total supply:", token.functions.totalSupply().call())
    print("APY balance:", format_wei(token.functions.balanceOf(deployer_address).call(), decimals))

    return {
        "GovernanceTokenProxyAdmin": proxy_admin.address,
        "GovernanceToken": logic.address,
        "GovernanceTokenProxy": proxy.address,
    }


if __name__ == "__main__":
    sys.exit(run(main))
