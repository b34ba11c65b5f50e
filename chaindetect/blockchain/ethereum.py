"""EVM blockchain client implementation.

Wraps a single JSON-RPC endpoint using web3.py. Ethereum, BSC and Base
all speak the same protocol, so one client class serves every EVM chain.
"""

import logging

from web3 import AsyncWeb3
from web3.exceptions import TransactionNotFound

from chaindetect.blockchain.base import EVMClientInterface

logger = logging.getLogger(__name__)

# Minimal ERC-20 ABI, enough to tell a fungible token contract apart
ERC20_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
]


class EVMClient(EVMClientInterface):
    """EVM JSON-RPC client bound to one endpoint.

    Uses AsyncWeb3 over HTTP. Addresses are checksummed before every call;
    invalid addresses raise ``ValueError``.
    """

    def __init__(self, endpoint: str):
        super().__init__(endpoint)
        self._w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(endpoint))

    async def get_network(self) -> str:
        """Get the chain ID reported by the endpoint."""
        chain_id = await self._w3.eth.chain_id
        return str(chain_id)

    async def get_code(self, address: str) -> bytes:
        """Get deployed bytecode."""
        code = await self._w3.eth.get_code(self._w3.to_checksum_address(address))
        return bytes(code)

    async def total_supply(self, address: str) -> int:
        """Call ERC-20 ``totalSupply()``."""
        contract = self._w3.eth.contract(
            address=self._w3.to_checksum_address(address),
            abi=ERC20_ABI,
        )
        return await contract.functions.totalSupply().call()

    async def get_transaction_count(self, address: str) -> int:
        """Get the address nonce."""
        return await self._w3.eth.get_transaction_count(self._w3.to_checksum_address(address))

    async def get_transaction(self, tx_hash: str) -> dict | None:
        """Get transaction details."""
        try:
            tx = await self._w3.eth.get_transaction(tx_hash)
        except TransactionNotFound:
            return None
        return dict(tx) if tx else None

    async def close(self) -> None:
        """Close the provider connection."""
        try:
            if hasattr(self._w3.provider, "disconnect"):
                await self._w3.provider.disconnect()
        except Exception as e:
            logger.debug(f"Error closing EVM client {self.endpoint}: {e}")
