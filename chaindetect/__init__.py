"""Chain Detect - identify which blockchain an address or hash belongs to."""

from chaindetect.blockchain.base import AddressType, ChainId, DetectionResult, TokenCheckResult
from chaindetect.core.exceptions import ChainDetectError, RateLimitExceededError
from chaindetect.services.detection_service import (
    ChainDetectionService,
    close_detection_service,
    get_detection_service,
)
from chaindetect.utils.validation import is_evm_address, is_solana_address, is_transaction_hash

__version__ = "0.1.0"

__all__ = [
    "AddressType",
    "ChainDetectError",
    "ChainDetectionService",
    "ChainId",
    "DetectionResult",
    "RateLimitExceededError",
    "TokenCheckResult",
    "close_detection_service",
    "get_detection_service",
    "is_evm_address",
    "is_solana_address",
    "is_transaction_hash",
]
