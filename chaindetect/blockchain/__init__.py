"""Blockchain client module.

Provides the RPC client abstraction, provider resolution, and detection probes.
"""

from chaindetect.blockchain.base import (
    EVM_CHAINS,
    AddressType,
    ChainClient,
    ChainId,
    DetectionResult,
    EVMClientInterface,
    SolanaClientInterface,
    TokenCheckResult,
)
from chaindetect.blockchain.factory import (
    create_evm_client,
    create_solana_client,
)
from chaindetect.blockchain.provider import ProviderCache, ProviderResolver

__all__ = [
    "EVM_CHAINS",
    "AddressType",
    "ChainClient",
    "ChainId",
    "DetectionResult",
    "EVMClientInterface",
    "SolanaClientInterface",
    "TokenCheckResult",
    "ProviderCache",
    "ProviderResolver",
    "create_evm_client",
    "create_solana_client",
]
