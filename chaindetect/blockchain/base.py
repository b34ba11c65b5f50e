"""Base blockchain client interface.

Defines the chain identifiers, detection results, and the abstract
client interface that every RPC wrapper must follow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class ChainId(str, Enum):
    """Supported blockchain networks."""

    SOLANA = "solana"
    ETHEREUM = "ethereum"
    BSC = "bsc"
    BASE = "base"
    UNKNOWN = "unknown"


class AddressType(str, Enum):
    """Kind of entity an address names."""

    TOKEN = "token"
    WALLET = "wallet"
    UNKNOWN = "unknown"


# Fixed probe order; reductions pick the first positive chain in this order
EVM_CHAINS: tuple[ChainId, ...] = (ChainId.ETHEREUM, ChainId.BSC, ChainId.BASE)


@dataclass(frozen=True)
class TokenCheckResult:
    """Outcome of an EVM token check across chains."""

    chain: ChainId | None
    is_token: bool


@dataclass(frozen=True)
class DetectionResult:
    """Reduced answer for a user-supplied address or hash."""

    chain: ChainId | None
    address_type: AddressType
    is_transaction: bool


class ChainClient(ABC):
    """Abstract base class for RPC clients.

    Each client is bound to a single endpoint URL and exposes only the
    capabilities the probes need.
    """

    def __init__(self, endpoint: str) -> None:
        self.endpoint = endpoint

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.endpoint!r})"


class EVMClientInterface(ChainClient):
    """Capabilities used against EVM chains."""

    @abstractmethod
    async def get_network(self) -> str:
        """Fetch the chain ID, proving the endpoint is live."""
        pass

    @abstractmethod
    async def get_code(self, address: str) -> bytes:
        """Get deployed bytecode at an address (empty for wallets)."""
        pass

    @abstractmethod
    async def total_supply(self, address: str) -> int:
        """Call ``totalSupply()`` on an ERC-20 shaped contract."""
        pass

    @abstractmethod
    async def get_transaction_count(self, address: str) -> int:
        """Get the nonce of an address."""
        pass

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> dict | None:
        """Get a transaction by hash, or None if the node does not know it."""
        pass


class SolanaClientInterface(ChainClient):
    """Capabilities used against Solana."""

    @abstractmethod
    async def get_account_owner(self, address: str) -> str | None:
        """Get the owner program of an account, or None if it does not exist."""
        pass
