"""
Off-chain authorization signatures

The reward distributor releases tokens against an EIP-712 signature
from its registered signer over (nonce, wallet, amount). The nonce is
the distributor's per-recipient counter, so each signature is
single-use.
"""

from dataclasses import dataclass
from typing import Dict

from eth_account import Account
from eth_account.messages import encode_typed_data
from web3 import Web3

from infrastructure.errors import ValidationError

REWARD_DOMAIN_NAME = "APY Distribution"
REWARD_DOMAIN_VERSION = "1"

RECIPIENT_TYPES = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "Recipient": [
        {"name": "nonce", "type": "uint256"},
        {"name": "wallet", "type": "address"},
        {"name": "amount", "type": "uint256"},
    ],
}


@dataclass
class Signature:
    v: int
    r: bytes
    s: bytes
    signature: bytes

    @property
    def r_hex(self) -> str:
        return Web3.to_hex(self.r)

    @property
    def s_hex(self) -> str:
        return Web3.to_hex(self.s)


def reward_typed_data(
    verifying_contract: str,
    nonce: int,
    recipient: str,
    amount: int,
    chain_id: int,
    domain_name: str = REWARD_DOMAIN_NAME,
) -> Dict:
    """Full EIP-712 message for a reward claim."""
    if int(amount) < 0 or int(nonce) < 0:
        raise ValidationError("Nonce and amount must be non-negative")

    return {
        "types": RECIPIENT_TYPES,
        "primaryType": "Recipient",
        "domain": {
            "name": domain_name,
            "version": REWARD_DOMAIN_VERSION,
            "chainId": int(chain_id),
            "verifyingContract": Web3.to_checksum_address(verifying_contract),
        },
        "message": {
            "nonce": int(nonce),
            "wallet": Web3.to_checksum_address(recipient),
            "amount": int(amount),
        },
    }


def generate_reward_signature(
    private_key,
    verifying_contract: str,
    nonce: int,
    recipient: str,
    amount: int,
    chain_id: int,
    domain_name: str = REWARD_DOMAIN_NAME,
) -> Signature:
    """Sign a reward claim with the distributor's signer key."""
    typed_data = reward_typed_data(verifying_contract, nonce, recipient, amount, chain_id, domain_name)
    signable = encode_typed_data(full_message=typed_data)
    signed = Account.sign_message(signable, private_key)

    return Signature(
        v=signed.v,
        r=signed.r.to_bytes(32, "big"),
        s=signed.s.to_bytes(32, "big"),
        signature=bytes(signed.signature),
    )


def recover_reward_signer(
    signature: Signature,
    verifying_contract: str,
    nonce: int,
    recipient: str,
    amount: int,
    chain_id: int,
    domain_name: str = REWARD_DOMAIN_NAME,
) -> str:
    """Address that produced a reward signature."""
    typed_data = reward_typed_data(verifying_contract, nonce, recipient, amount, chain_id, domain_name)
    signable = encode_typed_data(full_message=typed_data)
    return Account.recover_message(signable, signature=signature.signature)
