"""
Gas price selection

An explicit --gas-price always wins. Otherwise the gas station's "fast"
tier is used, and the node's eth_gasPrice when the station is down.
"""

import logging
from typing import Optional

import httpx
from web3 import Web3

from infrastructure.config import get_config
from infrastructure.errors import ExternalAPIError, retry_sync

logger = logging.getLogger("GasPrice")

# EthGasStation reports prices in tenths of a gwei
GAS_STATION_UNIT = 10


@retry_sync(max_attempts=3, delay=1.0, exceptions=(httpx.HTTPError,))
def _fetch_station(url: str, timeout: int) -> dict:
    response = httpx.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


def fetch_gas_station_price(tier: str = "fast") -> int:
    """Gas price in wei from the gas station API."""
    gas_cfg = get_config().gas
    try:
        data = _fetch_station(gas_cfg.gas_station_url, gas_cfg.gas_station_timeout)
    except httpx.HTTPError as e:
        status = getattr(getattr(e, "response", None), "status_code", None)
        raise ExternalAPIError("gas-station", status, f"Gas station request failed: {e}") from e
    except ValueError as e:
        raise ExternalAPIError("gas-station", message=f"Gas station returned invalid JSON: {e}") from e

    try:
        gwei = float(data[tier]) / GAS_STATION_UNIT
    except (KeyError, TypeError, ValueError) as e:
        raise ExternalAPIError("gas-station", message=f"Gas station has no usable '{tier}' price") from e
    if not gwei > 0:
        raise ExternalAPIError("gas-station", message=f"Gas station '{tier}' price is not positive: {gwei}")
    return Web3.to_wei(gwei, "gwei")


def get_gas_price(w3: Web3, gas_price_gwei: Optional[float] = None) -> int:
    """
    Gas price in wei for the next transaction.

    Args:
        w3: Connected node, used as fallback source
        gas_price_gwei: Explicit override in gwei
    """
    if gas_price_gwei is not None:
        gas_price = Web3.to_wei(gas_price_gwei, "gwei")
        source = "override"
    else:
        try:
            gas_price = fetch_gas_station_price()
            source = "gas station"
        except ExternalAPIError as e:
            logger.warning(f"{e.message}; falling back to node gas price")
            gas_price = w3.eth.gas_price
            source = "node"

    logger.info(f"Gas price ({source}): {Web3.from_wei(gas_price, 'gwei')} gwei")
    return int(gas_price)
