"""
Unit Conversion Tests

Run: python -m pytest tests/test_units.py -v
"""

from decimal import Decimal

import pytest

from infrastructure.errors import ValidationError
from deployment.units import bytes32, dai, erc20, format_wei, token_amount, undo_token_amount, usdc


class TestTokenAmount:

    @pytest.mark.parametrize("amount,decimals,expected", [
        ("100000000", 18, 100_000_000 * 10**18),
        ("1.5", 6, 1_500_000),
        (35000, 18, 35000 * 10**18),
        ("0.000001", 6, 1),
    ])
    def test_scaling(self, amount, decimals, expected):
        assert token_amount(amount, decimals) == expected

    def test_float_uses_shortest_repr(self):
        # 1.07 is not exactly representable as a binary float
        assert token_amount(1.07, 18) == 1_070_000_000_000_000_000
        print("✅ Float amounts convert exactly")

    def test_too_many_decimals_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            token_amount("1.0000001", 6)

        assert exc_info.value.details["decimals"] == 6
        print(f"✅ Rejected: {exc_info.value.message}")

    @pytest.mark.parametrize("bad", ["abc", "", "NaN", "Infinity"])
    def test_invalid_input_rejected(self, bad):
        with pytest.raises(ValidationError):
            token_amount(bad, 18)

    def test_aliases(self):
        assert erc20("2", 8) == 200_000_000
        assert dai("1") == 10**18
        assert usdc("1") == 10**6


class TestFormatting:

    def test_undo_token_amount(self):
        assert undo_token_amount(1_500_000, 6) == Decimal("1.5")

    @pytest.mark.parametrize("raw,decimals,expected", [
        (10**18, 18, "1"),
        (15 * 10**17, 18, "1.5"),
        (0, 18, "0"),
        (1_234_500, 6, "1.2345"),
        (100_000_000 * 10**18, 18, "100000000"),
    ])
    def test_format_wei(self, raw, decimals, expected):
        assert format_wei(raw, decimals) == expected


class TestBytes32:

    def test_right_padded(self):
        encoded = bytes32("curve_y")

        assert len(encoded) == 32
        assert encoded.startswith(b"curve_y")
        assert encoded[7:] == b"\x00" * 25

    def test_too_long_rejected(self):
        with pytest.raises(ValidationError):
            bytes32("x" * 33)
        print("✅ bytes32 overflow rejected")
