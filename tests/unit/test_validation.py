"""
tests/unit/test_validation.py - Address and hash format tests.
"""

import pytest

from chaindetect.utils.validation import (
    is_evm_address,
    is_evm_transaction_hash,
    is_solana_address,
    is_solana_signature,
    is_transaction_hash,
)
from tests.conftest import SOLANA_ACCOUNT, USDC_SPL_MINT, USDT_ERC20


class TestTransactionHash:
    """Test transaction hash shape detection."""

    def test_evm_hash(self):
        assert is_transaction_hash("0x" + "a" * 64)
        assert is_evm_transaction_hash("0x" + "F" * 64)

    def test_evm_hash_wrong_length(self):
        """65 characters with 0x is not a hash."""
        assert not is_transaction_hash("0x" + "a" * 63)
        assert not is_transaction_hash("0x" + "a" * 65)

    @pytest.mark.parametrize("length", [80, 85, 88, 90])
    def test_solana_signature_lengths(self, length):
        sig = "5" * length
        assert is_transaction_hash(sig)
        assert is_solana_signature(sig)

    @pytest.mark.parametrize("length", [79, 91])
    def test_solana_signature_out_of_range(self, length):
        assert not is_transaction_hash("5" * length)

    @pytest.mark.parametrize("bad_char", ["0", "O", "I", "l", "+", "/"])
    def test_solana_signature_rejects_non_base58(self, bad_char):
        """An 85-char string containing a non-base58 character is rejected."""
        sig = "5" * 84 + bad_char
        assert len(sig) == 85
        assert not is_transaction_hash(sig)

    def test_solana_signature_rejects_0x_prefix(self):
        assert not is_solana_signature("0x" + "5" * 84)

    def test_trailing_newline_rejected(self):
        assert not is_solana_signature("5" * 84 + "\n")

    def test_empty(self):
        assert not is_transaction_hash("")


class TestAddresses:
    """Test address format validation."""

    def test_solana_address(self):
        assert is_solana_address(USDC_SPL_MINT)
        assert is_solana_address(SOLANA_ACCOUNT)

    def test_solana_address_rejects_evm(self):
        assert not is_solana_address(USDT_ERC20)

    def test_solana_address_rejects_short(self):
        assert not is_solana_address("So1111111111")

    def test_solana_address_rejects_bad_alphabet(self):
        assert not is_solana_address("0" * 43)

    def test_evm_address(self):
        assert is_evm_address(USDT_ERC20)
        assert is_evm_address(USDT_ERC20.lower())

    def test_evm_address_bad_checksum(self):
        """Mixed case must match the EIP-55 checksum."""
        bad = "0x" + USDT_ERC20[2].swapcase() + USDT_ERC20[3:]
        assert not is_evm_address(bad)

    def test_evm_address_rejects_solana(self):
        assert not is_evm_address(USDC_SPL_MINT)

    def test_empty(self):
        assert not is_evm_address("")
        assert not is_solana_address("")
