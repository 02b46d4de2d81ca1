"""
Deploy the alpha deployment factories

The factory address list is rewritten after every deployment so a
failure part-way through leaves a record of what already went out.
"""

import json
import sys
from pathlib import Path

from infrastructure.config import get_config
from deployment.contracts import ContractDeployer
from deployment.gas import get_gas_price
from deployment.runner import base_parser, prepare, print_tx, run
from deployment.transactions import GasTally

FACTORY_NAMES = [
    "ProxyAdminFactory",
    "ProxyFactory",
    "AddressRegistryV2Factory",
    "MetaPoolTokenFactory",
    "PoolTokenV1Factory",
    "PoolTokenV2Factory",
    "TvlManagerFactory",
    "Erc20AllocationFactory",
    "OracleAdapterFactory",
    "LpAccountFactory",
]


def write_addresses(path: Path, addresses):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(addresses, f, indent=2)
        f.write("\n")


def main(argv=None):
    parser = base_parser(__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--output",
        default=None,
        help="Factory address list file; defaults to FACTORY_ADDRESSES_PATH",
    )
    args = parser.parse_args(argv)
    ctx, signer = prepare(args)

    output = Path(args.output or get_config().paths.factory_addresses)
    deployer = ContractDeployer(ctx, signer)
    tally = GasTally()
    addresses = []

    print("Deploying ...")
    print("")
    for name in FACTORY_NAMES:
        print(name)
        # re-read each time, the deployment can take a while
        gas_price = get_gas_price(ctx.w3, args.gas_price)
        deployed = deployer.deploy(name, gas_price=gas_price)
        print_tx(ctx, "  tx", deployed.tx_hash)
        tally.add(deployed.receipt)
        print("  ... done.")
        print("")

        addresses.append(deployed.address)
        write_addresses(output, addresses)

    print(f"Total gas used: {tally.total}")
    print("")
    print(f"Deployed addresses filename: {output}")
    return addresses


if __name__ == "__main__":
    sys.exit(run(main))
