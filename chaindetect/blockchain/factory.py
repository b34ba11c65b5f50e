"""Blockchain client factory.

Builds RPC clients for endpoints.
"""

from chaindetect.blockchain.base import EVMClientInterface, SolanaClientInterface


def create_evm_client(endpoint: str) -> EVMClientInterface:
    """Build an EVM client for one endpoint."""
    from chaindetect.blockchain.ethereum import EVMClient

    return EVMClient(endpoint)


def create_solana_client(endpoint: str) -> SolanaClientInterface:
    """Build a Solana client for one endpoint."""
    from chaindetect.blockchain.solana import SolanaClient

    return SolanaClient(endpoint)
