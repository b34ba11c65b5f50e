"""Chain Detect utility functions.

Format validation and the timeout combinator shared by every remote call.
"""

from chaindetect.utils.timeout import with_timeout
from chaindetect.utils.validation import (
    is_evm_address,
    is_evm_transaction_hash,
    is_solana_address,
    is_solana_signature,
    is_transaction_hash,
)

__all__ = [
    "is_evm_address",
    "is_evm_transaction_hash",
    "is_solana_address",
    "is_solana_signature",
    "is_transaction_hash",
    "with_timeout",
]
