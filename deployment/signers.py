"""
Signer resolution

A signer is either a LocalAccount (key held by this process, transactions
signed locally) or a plain address unlocked on the node (local forks,
impersonated whales).
"""

import logging
from typing import List, Optional, Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3

from infrastructure.config import get_secrets
from infrastructure.errors import ConfigurationError, ValidationError

logger = logging.getLogger("Signers")

Account.enable_unaudited_hdwallet_features()

DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/{index}"

Signer = Union[LocalAccount, str]


def account_from_mnemonic(mnemonic: str, index: int = 0) -> LocalAccount:
    path = DEFAULT_DERIVATION_PATH.format(index=index)
    try:
        return Account.from_mnemonic(mnemonic, account_path=path)
    except Exception as e:
        # never echo the phrase itself
        raise ValidationError(f"Invalid mnemonic: {type(e).__name__}") from None


def account_from_env(env_var: str, index: int = 0) -> LocalAccount:
    """
    Load a signing account from a secret named by env var.

    Variables ending in _PRIVATE_KEY hold a hex key, everything else a
    BIP-39 mnemonic.
    """
    value = get_secrets().get(env_var)
    if not value:
        raise ConfigurationError(f"Must set {env_var} env var.", setting=env_var)

    if env_var.endswith("PRIVATE_KEY"):
        return Account.from_key(value)
    return account_from_mnemonic(value, index)


def resolve_signer(
    w3: Web3,
    env_var: Optional[str] = None,
    index: int = 0,
) -> Signer:
    """
    Signer for a script.

    A named secret is required when given: a missing one raises rather
    than falling back to another key. Without one the order is
    DEPLOYER_PRIVATE_KEY (index 0 only),
    then MNEMONIC, then the node's own unlocked accounts.
    """
    if env_var:
        account = account_from_env(env_var, index)
        logger.debug(f"Using signer from {env_var}")
        return account

    secrets = get_secrets()
    if index == 0 and secrets.has("DEPLOYER_PRIVATE_KEY"):
        logger.debug("Using signer from DEPLOYER_PRIVATE_KEY")
        return account_from_env("DEPLOYER_PRIVATE_KEY")
    if secrets.has("MNEMONIC"):
        logger.debug("Using signer from MNEMONIC")
        return account_from_env("MNEMONIC", index)

    accounts = node_accounts(w3)
    if len(accounts) <= index:
        raise ConfigurationError(
            f"No signer at index {index}: set MNEMONIC"
            + (" or DEPLOYER_PRIVATE_KEY" if index == 0 else ""),
            setting="MNEMONIC",
        )
    logger.debug("Using node-managed account")
    return accounts[index]


def node_accounts(w3: Web3) -> List[str]:
    return [Web3.to_checksum_address(a) for a in w3.eth.accounts]


def signer_address(signer: Signer) -> str:
    if isinstance(signer, str):
        return Web3.to_checksum_address(signer)
    return signer.address
