"""
Verify deployed contracts on Etherscan
Uses the Standard JSON Input from the latest compiler build-info
"""
import json
import logging
from typing import Dict, List, Optional, Sequence

import requests
from eth_abi import encode

from infrastructure.config import VERIFIABLE_NETWORKS, get_config, get_secrets
from infrastructure.errors import ExternalAPIError, ValidationError

from .artifacts import Artifact, ArtifactStore, get_artifacts
from .constants import get_chain_id
from .contracts import DeployedContract
from .network import NetworkContext
from .transactions import wait_for_receipt

logger = logging.getLogger("Verification")


def api_url(network: str, chain_id: Optional[int] = None) -> str:
    """Etherscan V2 endpoint; one host for every chain, selected by chainid."""
    if chain_id is None:
        chain_id = get_chain_id(network)
    return f"{get_config().explorer.api_url}?chainid={chain_id}"


def _abi_type(param: Dict) -> str:
    """Canonical type string, expanding tuples."""
    if param["type"].startswith("tuple"):
        inner = ",".join(_abi_type(c) for c in param.get("components", []))
        return f"({inner}){param['type'][len('tuple'):]}"
    return param["type"]


def encode_constructor_args(abi: List[Dict], args: Sequence, contract_name: str = "contract") -> str:
    """ABI-encoded constructor arguments, hex without 0x prefix."""
    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    inputs = constructor.get("inputs", []) if constructor else []
    if len(args) != len(inputs):
        raise ValidationError(
            f"{contract_name} constructor takes {len(inputs)} arguments, got {len(args)}",
            {"contract": contract_name, "expected": len(inputs), "given": len(args)},
        )
    if not inputs:
        return ""
    types = [_abi_type(p) for p in constructor["inputs"]]
    return encode(types, list(args)).hex()


def verify_contract(
    network: str,
    artifact: Artifact,
    address: str,
    constructor_args: Sequence = (),
    build_info: Optional[Dict] = None,
    chain_id: Optional[int] = None,
) -> Optional[str]:
    """
    Submit contract for verification.

    Raises:
        ValidationError: constructor arguments don't match the ABI

    Returns:
        Etherscan GUID for status polling, or None when skipped
    """
    api_key = get_secrets().get("ETHERSCAN_API_KEY")
    if not api_key:
        logger.warning("ETHERSCAN_API_KEY not set - skipping verification")
        return None

    if build_info is None:
        logger.warning("No build info available - skipping verification")
        return None

    explorer = get_config().explorer
    url = api_url(network, chain_id)
    encoded_args = encode_constructor_args(artifact.abi, constructor_args, artifact.name)
    source_input = build_info.get("input", {})
    settings = source_input.get("settings", {})
    optimizer = settings.get("optimizer", {})
    compiler_version = build_info.get("solcLongVersion")

    print(f"\n🔍 Verifying {artifact.name} at {address[:10]}...")

    params = {
        "apikey": api_key,
        "module": "contract",
        "action": "verifysourcecode",
        "contractaddress": address,
        "sourceCode": json.dumps(source_input),
        "codeformat": "solidity-standard-json-input",
        "contractname": artifact.fully_qualified_name,
        "compilerversion": f"v{compiler_version}" if compiler_version else explorer.compiler_version,
        "optimizationUsed": "1" if optimizer.get("enabled", True) else "0",
        "runs": str(optimizer.get("runs", explorer.optimization_runs)),
        "constructorArguements": encoded_args  # Etherscan typo
    }

    try:
        response = requests.post(url, data=params, timeout=60)
        result = response.json()
    except (requests.RequestException, ValueError) as e:
        raise ExternalAPIError("etherscan", message=f"Verification request failed: {e}") from e

    if result.get("status") == "1":
        guid = result.get("result")
        print(f"✅ Submitted! GUID: {guid}")
        return guid

    print(f"❌ Failed: {result.get('result', result)}")
    return None


def check_verification_status(network: str, guid: str, chain_id: Optional[int] = None) -> str:
    """Etherscan's verdict for a submitted GUID, e.g. 'Pass - Verified'."""
    api_key = get_secrets().get("ETHERSCAN_API_KEY")
    url = api_url(network, chain_id)
    try:
        response = requests.get(url, params={
            "apikey": api_key,
            "module": "contract",
            "action": "checkverifystatus",
            "guid": guid,
        }, timeout=30)
        return response.json().get("result", "")
    except (requests.RequestException, ValueError) as e:
        raise ExternalAPIError("etherscan", message=f"Status request failed: {e}") from e


def verify_deployment(
    ctx: NetworkContext,
    deployed: DeployedContract,
    artifacts: Optional[ArtifactStore] = None,
) -> Optional[str]:
    """
    Verify a freshly deployed contract on public networks.

    Waits for enough confirmations for Etherscan to have indexed the
    contract code first. Local networks are skipped.
    """
    if ctx.name not in VERIFIABLE_NETWORKS:
        return None

    artifacts = artifacts or get_artifacts()
    print("")
    print("Verifying on Etherscan ...")
    wait_for_receipt(ctx, deployed.tx_hash, confirmations=get_config().gas.verify_confirmations)

    guid = verify_contract(
        ctx.name,
        artifacts.get(deployed.name),
        deployed.address,
        deployed.constructor_args,
        artifacts.latest_build_info(),
        chain_id=ctx.chain_id,
    )
    if guid and ctx.address_url(deployed.address):
        print(f"📋 Check status at: {ctx.address_url(deployed.address)}#code")
    return guid
