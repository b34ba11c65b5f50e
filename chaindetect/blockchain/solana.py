"""Solana blockchain client implementation.

Provides the Solana account lookups used for detection via solana-py.
"""

import logging

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solders.pubkey import Pubkey

from chaindetect.blockchain.base import SolanaClientInterface

logger = logging.getLogger(__name__)

# SPL Token Program IDs
SPL_TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
SPL_TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"

TOKEN_PROGRAM_IDS = frozenset({SPL_TOKEN_PROGRAM_ID, SPL_TOKEN_2022_PROGRAM_ID})


class SolanaClient(SolanaClientInterface):
    """Solana RPC client bound to one endpoint."""

    def __init__(self, endpoint: str):
        super().__init__(endpoint)
        self._client = AsyncClient(endpoint, commitment=Confirmed)

    async def get_account_owner(self, address: str) -> str | None:
        """Get the owner program of an account.

        Raises:
            ValueError: If ``address`` is not a valid public key
        """
        pubkey = Pubkey.from_string(address)
        response = await self._client.get_account_info(pubkey)
        if response.value is None:
            return None
        return str(response.value.owner)

    async def close(self) -> None:
        """Close the client connection."""
        try:
            await self._client.close()
        except Exception as e:
            logger.debug(f"Error closing Solana client {self.endpoint}: {e}")
