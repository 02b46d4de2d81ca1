"""
Static registries of well-known contract and token addresses.

Immutable lookup tables: chain ids, price-feed aggregators, pool
stablecoins, and the "whale" accounts used to fund fork scenarios.
"""

from typing import Dict, List

from web3 import Web3

from infrastructure.errors import NotFoundError

# =============================================================================
# NETWORKS
# =============================================================================

# Local networks are mainnet forks and share mainnet's chain id
CHAIN_IDS: Dict[str, int] = {
    "MAINNET": 1,
    "RINKEBY": 4,
    "GOERLI": 5,
    "KOVAN": 42,
    "LOCALHOST": 1,
    "TESTNET": 1,
}

# =============================================================================
# MAINNET ADDRESSES
# =============================================================================

# Maker DAO
# https://changelog.makerdao.com/releases/mainnet/latest/contracts.json
DAI_ADDRESS = "0x6B175474E89094C44Da98b954EedeAC495271d0F"  # MCD_DAI
DAI_MINTER_ADDRESS = "0x9759A6Ac90977b93B58547b4A71c78317f391A28"  # MCD_JOIN_DAI
CDAI_ADDRESS = "0x5d3a536E4D6DbD6114cc1Ead35777bAB948E3643"

# Compound Finance
COMPTROLLER_ADDRESS = "0x3d9819210A31b4961b30EF54bE2aeD79B9c9Cd3B"
COMP_ADDRESS = "0xc00e94Cb662C3520282E6f5717214004A7f26888"

# 1inch OneSplit moves around; if calls hit "no code at <address>",
# check 1proto.eth for the current deployment
ONE_SPLIT_ADDRESS = "0x50FDA034C0Ce7a8f7EFDAebDA7Aa7cA21CC1267e"  # 1proto.eth

USDC_ADDRESS = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDT_ADDRESS = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
BAL_ADDRESS = "0xba100000625a3754423978a60c9317c58a424e3D"
LINK_ADDRESS = "0x514910771AF9Ca656af840dff83E8264EcF986CA"

# Aave lending pool, holds plenty of LINK
LINK_WHALE_ADDRESS = "0x3dfd23A6c5E8BbcFc9581d2E864a68feb6a076d3"

# =============================================================================
# WHALES
# =============================================================================

# sUSD curve pool has plenty of the pool stablecoins
# https://etherscan.io/address/0xa5407eae9ba41422680e2e00537571bcc53efbfd
WHALE_POOLS: Dict[str, str] = {
    "DAI": "0xA5407eAE9Ba41422680e2e00537571bcC53efBfD",
    "ADAI": "0x6231bd0147ca6d052b833183037b04cfb2090e5c",
    "USDC": "0xA5407eAE9Ba41422680e2e00537571bcC53efBfD",
    "USDT": "0xA5407eAE9Ba41422680e2e00537571bcC53efBfD",
    "ALUSD": "0x43b4fdfd4ff969587185cdb6f0bd875c5fc83f8c",
    "BUSD": "0x4807862aa8b2bf68830e4c8dc86d0e9a998e085a",
    "CDAI": "0x6341c289b2e0795a04223df04b53a77970958723",
    "FRAX": "0xc69ddcd4dfef25d8a793241834d4cc4b3668ead6",
    "CYDAI": "0x2dded6da1bf5dbdf597c45fcfaa3194e53ecfeaf",
    "LUSD": "0x66017d22b0f8556afdd19fc67041899eb65a21bb",
    "MUSD": "0xe2f2a5C287993345a840Db3B0845fbC70f5935a5",
    "SUSD": "0x57Ab1ec28D129707052df4dF418D58a2D46d5f51",
    "USDN": "0x674C6Ad92Fd080e4004b2312b45f796a192D27a0",
    "USDP": "0x42d7025938bec20b69cbae5a77421082407f053a",
    "UST": "0xa47c8bf37f92aBed4A126BDA807A7b7498661acD",
}

# =============================================================================
# PRICE FEEDS
# =============================================================================

# Chainlink aggregators, see the Mainnet section of
# https://docs.chain.link/docs/ethereum-addresses
_MAINNET_FEEDS = {
    "DAI-USD": "0xAed0c38402a5d19df6E4c03F4E2DceD6e29c1ee9",
    "USDC-USD": "0x8fFfFfd4AfB6115b954Bd326cbe7B4BA576818f6",
    "USDT-USD": "0x3E7d1eAB13ad0104d2750B8863b489D65364e32D",
    "ETH-USD": "0x5f4eC3Df9cbd43714FE2740f5E3616155c5b8419",
    "DAI-ETH": "0x773616E4d11A78F511299002da57A0a94577F1f4",
    "USDC-ETH": "0x986b5E1e1755e3C2440e960477f25201B0a8bbD4",
    "USDT-ETH": "0xEe9F2375b4bdF6387aa8265dD4FB8F16512A1d46",
}

# TVL aggregator on local forks comes from deploy_tvl_aggregator run first
# against the shared test mnemonic, so the address is deterministic
_LOCAL_TVL_AGGREGATOR = "0x344D5d70fc3c3097f82d1F26464aaDcEb30C6AC7"

AGG_MAP: Dict[str, Dict[str, str]] = {
    "MAINNET": {"TVL": "0xDb299D394817D8e7bBe297E84AFfF7106CF92F5f", **_MAINNET_FEEDS},
    "KOVAN": {
        "TVL": "0xCAFECAFECAFECAFECAFECAFECAFECAFECAFECAFE",
        "DAI-USD": "0x777A68032a88E5A84678A77Af2CD65A7b3c0775a",
        "USDC-USD": "0x9211c6b3BF41A10F78539810Cf5c64e1BB78Ec60",
        "USDT-USD": "0x2ca5A90D34cA333661083F89D831f757A9A50148",
        "ETH-USD": "0x9326BFA02ADD2366b30bacB125260Af641031331",
        "DAI-ETH": "0x22B58f1EbEDfCA50feF632bD73368b2FdA96D541",
        "USDC-ETH": "0x64EaC61A2DFda2c3Fa04eED49AA33D021AeC8838",
        "USDT-ETH": "0x0bF499444525a23E7Bb61997539725cA2e928138",
    },
    "LOCALHOST": {"TVL": _LOCAL_TVL_AGGREGATOR, **_MAINNET_FEEDS},
    "TESTNET": {"TVL": _LOCAL_TVL_AGGREGATOR, **_MAINNET_FEEDS},
}

_MAINNET_TOKEN_AGGS = [
    {"symbol": "DAI", "token": DAI_ADDRESS, "aggregator": _MAINNET_FEEDS["DAI-ETH"]},
    {"symbol": "USDC", "token": USDC_ADDRESS, "aggregator": _MAINNET_FEEDS["USDC-ETH"]},
    {"symbol": "USDT", "token": USDT_ADDRESS, "aggregator": _MAINNET_FEEDS["USDT-ETH"]},
]

TOKEN_AGG_MAP: Dict[str, List[Dict[str, str]]] = {
    "MAINNET": _MAINNET_TOKEN_AGGS,
    "KOVAN": [
        {
            "symbol": "DAI",
            "token": "0xff795577d9ac8bd7d90ee22b6c1703490b6512fd",
            "aggregator": "0x22B58f1EbEDfCA50feF632bD73368b2FdA96D541",
        },
        {
            "symbol": "USDC",
            "token": "0xe22da380ee6b445bb8273c81944adeb6e8450422",
            "aggregator": "0x64EaC61A2DFda2c3Fa04eED49AA33D021AeC8838",
        },
        {
            "symbol": "USDT",
            "token": "0x13512979ade267ab5100878e2e0f485b568328a4",
            "aggregator": "0x0bF499444525a23E7Bb61997539725cA2e928138",
        },
    ],
    "LOCALHOST": _MAINNET_TOKEN_AGGS,
    "TESTNET": _MAINNET_TOKEN_AGGS,
}

STABLECOIN_SYMBOLS = ["DAI", "USDC", "USDT"]

# =============================================================================
# ADDRESS BOOK NAMES
# =============================================================================

CONTRACT_NAMES = [
    "PoolTokenProxyAdmin",
    "DAI_PoolToken",
    "DAI_PoolTokenProxy",
    "USDC_PoolToken",
    "USDC_PoolTokenProxy",
    "USDT_PoolToken",
    "USDT_PoolTokenProxy",
    "PoolTokenV2",
    "Demo_DAI_PoolTokenProxy",
    "Demo_USDC_PoolTokenProxy",
    "Demo_USDT_PoolTokenProxy",
    "AddressRegistry",
    "AddressRegistryV2",
    "AddressRegistryProxy",
    "AddressRegistryProxyAdmin",
    "GovernanceToken",
    "GovernanceTokenProxy",
    "GovernanceTokenProxyAdmin",
    "MetaPoolToken",
    "MetaPoolTokenProxy",
    "MetaPoolTokenProxyAdmin",
    "OracleAdapter",
    "PoolManager",
    "PoolManagerProxy",
    "PoolManagerProxyAdmin",
    "ProxyConstructorArg",
    "RewardDistributor",
    "TvlManager",
    "GenericExecutor",
    "AdminSafe",
    "LpSafe",
]


# =============================================================================
# LOOKUPS
# =============================================================================

def get_chain_id(network: str) -> int:
    try:
        return CHAIN_IDS[network.upper()]
    except KeyError:
        raise NotFoundError("Chain id", network.upper()) from None


def get_stablecoin_address(symbol: str, network: str) -> str:
    """Checksummed address of a pool stablecoin on a network."""
    for entry in TOKEN_AGG_MAP.get(network.upper(), []):
        if entry["symbol"] == symbol.upper():
            return Web3.to_checksum_address(entry["token"])
    raise NotFoundError("Stablecoin", f"{symbol.upper()} on {network.upper()}")


def get_aggregator_address(key: str, network: str) -> str:
    """Checksummed price-feed address for a key like "TVL" or "DAI-USD"."""
    feeds = AGG_MAP.get(network.upper(), {})
    if key not in feeds:
        raise NotFoundError("Aggregator", f"{key} on {network.upper()}")
    return Web3.to_checksum_address(feeds[key])


def get_whale_address(symbol: str) -> str:
    try:
        return Web3.to_checksum_address(WHALE_POOLS[symbol.upper()])
    except KeyError:
        raise NotFoundError("Whale", symbol.upper()) from None
