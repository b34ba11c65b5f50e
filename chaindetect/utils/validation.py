"""Address and hash format validation.

Shape checks only; nothing here touches the network.
"""

import re

from solders.pubkey import Pubkey
from web3 import Web3

EVM_TX_HASH_LENGTH = 66
SOLANA_SIGNATURE_MIN_LENGTH = 80
SOLANA_SIGNATURE_MAX_LENGTH = 90

_BASE58_RE = re.compile(r"[1-9A-HJ-NP-Za-km-z]+")


def is_solana_address(address: str) -> bool:
    """Validate Solana address format.

    Solana addresses are base58 encoded 32-byte public keys, 32-44 characters.
    """
    if not address:
        return False
    if len(address) < 32 or len(address) > 44:
        return False
    try:
        Pubkey.from_string(address)
        return True
    except Exception:
        return False


def is_evm_address(address: str) -> bool:
    """Validate EVM address format (0x + 40 hex, checksum enforced on mixed case)."""
    if not address:
        return False
    return Web3.is_address(address)


def is_evm_transaction_hash(tx_hash: str) -> bool:
    """EVM transaction hashes are 66 characters starting with 0x."""
    return len(tx_hash) == EVM_TX_HASH_LENGTH and tx_hash.startswith("0x")


def is_solana_signature(tx_hash: str) -> bool:
    """Solana signatures are 80-90 base58 characters with no 0x prefix.

    Rough check: a well-formed string is not proof the signature exists.
    """
    if tx_hash.startswith("0x"):
        return False
    if not SOLANA_SIGNATURE_MIN_LENGTH <= len(tx_hash) <= SOLANA_SIGNATURE_MAX_LENGTH:
        return False
    return bool(_BASE58_RE.fullmatch(tx_hash))


def is_transaction_hash(tx_hash: str) -> bool:
    """Validate transaction hash format for any supported chain."""
    if not tx_hash:
        return False
    return is_evm_transaction_hash(tx_hash) or is_solana_signature(tx_hash)
