"""
Token amount and encoding helpers.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from infrastructure.errors import ValidationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
FAKE_ADDRESS = "0xCAFECAFECAFECAFECAFECAFECAFECAFECAFECAFE"
ANOTHER_FAKE_ADDRESS = "0xBAADC0FFEEBAADC0FFEEBAADC0FFEEBAADC0FFEE"

MAX_UINT256 = 2**256 - 1

Number = Union[int, str, Decimal, float]


def token_amount(amount: Number, decimals: int = 18) -> int:
    """
    Scale a human-readable amount to the token's smallest unit.

    Floats go through their shortest repr ("1.07" rather than
    1.0700000000000000621...). More fractional digits than the token
    supports is an error, never a silent truncation.
    """
    decimals = int(decimals)
    try:
        value = Decimal(repr(amount)) if isinstance(amount, float) else Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError(f"Invalid token amount: {amount!r}") from None

    if not value.is_finite():
        raise ValidationError(f"Invalid token amount: {amount!r}")

    scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValidationError(
            f"Amount {amount} has more than {decimals} decimal places",
            {"amount": str(amount), "decimals": decimals},
        )
    return int(scaled)


def erc20(amount: Number, decimals: int = 18) -> int:
    return token_amount(amount, decimals)


def dai(amount: Number) -> int:
    return token_amount(amount, 18)


def usdc(amount: Number) -> int:
    return token_amount(amount, 6)


def undo_token_amount(raw: int, decimals: int = 18) -> Decimal:
    """Inverse of token_amount."""
    return Decimal(int(raw)).scaleb(-int(decimals))


def format_wei(raw: int, decimals: int = 18) -> str:
    """Human-readable amount for status output, trailing zeros stripped."""
    value = undo_token_amount(raw, decimals)
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def bytes32(text: str) -> bytes:
    """Right-zero-padded UTF-8 encoding, as used for registry ids."""
    encoded = text.encode("utf-8")
    if len(encoded) > 32:
        raise ValidationError(f"'{text}' does not fit in bytes32")
    return encoded.ljust(32, b"\x00")
