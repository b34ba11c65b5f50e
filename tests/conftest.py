"""
Pytest configuration and fixtures for chaindetect tests.

RPC clients are replaced with in-memory fakes so no test touches the network.
"""

import asyncio
from dataclasses import dataclass, field

import pytest

from chaindetect.blockchain.base import EVMClientInterface, SolanaClientInterface
from chaindetect.blockchain.provider import ProviderCache
from chaindetect.blockchain.solana import SPL_TOKEN_PROGRAM_ID
from chaindetect.core.config import Settings
from chaindetect.core.rate_limiter import RateLimiter
from chaindetect.services.detection_service import ChainDetectionService

SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

USDT_ERC20 = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
USDC_SPL_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
SOLANA_ACCOUNT = "So11111111111111111111111111111111111111112"
EVM_TX_HASH = "0x" + "ab" * 32
SOLANA_SIGNATURE = "5k9s" + "X" * 84


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Async sleep replacement that records requested durations."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@dataclass
class EVMEndpointState:
    """Behaviour of one fake EVM endpoint."""

    online: bool = True
    delay: float = 0.0
    code: bytes = b""
    total_supply: int | None = None
    nonce: int = 0
    transactions: set[str] = field(default_factory=set)


class FakeEVMClient(EVMClientInterface):
    def __init__(self, endpoint: str, state: EVMEndpointState):
        super().__init__(endpoint)
        self.state = state
        self.calls: list[str] = []
        self.closed = False

    async def _respond(self, name: str):
        self.calls.append(name)
        if self.state.delay:
            await asyncio.sleep(self.state.delay)
        if not self.state.online:
            raise ConnectionError(f"{self.endpoint} is down")

    async def get_network(self) -> str:
        await self._respond("get_network")
        return "1"

    async def get_code(self, address: str) -> bytes:
        await self._respond("get_code")
        return self.state.code

    async def total_supply(self, address: str) -> int:
        await self._respond("total_supply")
        if self.state.total_supply is None:
            raise ValueError("execution reverted")
        return self.state.total_supply

    async def get_transaction_count(self, address: str) -> int:
        await self._respond("get_transaction_count")
        return self.state.nonce

    async def get_transaction(self, tx_hash: str) -> dict | None:
        await self._respond("get_transaction")
        if tx_hash in self.state.transactions:
            return {"hash": tx_hash, "blockNumber": 1}
        return None

    async def close(self) -> None:
        self.closed = True


class FakeEVMFactory:
    """Creates FakeEVMClient instances from per-endpoint state."""

    def __init__(self, states: dict[str, EVMEndpointState] | None = None):
        self.states = states or {}
        self.created: list[FakeEVMClient] = []

    def __call__(self, endpoint: str) -> FakeEVMClient:
        state = self.states.setdefault(endpoint, EVMEndpointState())
        client = FakeEVMClient(endpoint, state)
        self.created.append(client)
        return client

    def endpoints_created(self) -> list[str]:
        return [client.endpoint for client in self.created]


class FakeSolanaClient(SolanaClientInterface):
    def __init__(self, endpoint: str, owners: dict[str, str], online: bool = True):
        super().__init__(endpoint)
        self.owners = owners
        self.online = online
        self.closed = False
        self.lookups = 0

    async def get_account_owner(self, address: str) -> str | None:
        self.lookups += 1
        if not self.online:
            raise ConnectionError(f"{self.endpoint} is down")
        return self.owners.get(address)

    async def close(self) -> None:
        self.closed = True


class FakeSolanaFactory:
    def __init__(self, owners: dict[str, str] | None = None, offline: set[str] | None = None):
        self.owners = owners or {}
        self.offline = offline or set()
        self.created: list[FakeSolanaClient] = []

    def __call__(self, endpoint: str) -> FakeSolanaClient:
        client = FakeSolanaClient(endpoint, self.owners, online=endpoint not in self.offline)
        self.created.append(client)
        return client


@pytest.fixture
def settings() -> Settings:
    """Settings with short, fake endpoint lists."""
    return Settings(
        solana_rpc_urls=["sol-1", "sol-2", "sol-3", "sol-4"],
        eth_rpc_urls=["eth-1", "eth-2", "eth-3"],
        bsc_rpc_urls=["bsc-1", "bsc-2", "bsc-3"],
        base_rpc_urls=["base-1", "base-2", "base-3"],
        rpc_timeout_seconds=0.5,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def evm_factory() -> FakeEVMFactory:
    return FakeEVMFactory()


@pytest.fixture
def solana_factory() -> FakeSolanaFactory:
    return FakeSolanaFactory(
        owners={USDC_SPL_MINT: SPL_TOKEN_PROGRAM_ID, SOLANA_ACCOUNT: SYSTEM_PROGRAM_ID}
    )


@pytest.fixture
def service(settings, clock, recording_sleep, evm_factory, solana_factory) -> ChainDetectionService:
    """Detection service wired to fakes, with isolated cache and rate limiter."""
    return ChainDetectionService(
        settings=settings,
        rate_limiter=RateLimiter(
            window_seconds=settings.rate_limit_window_seconds,
            max_requests=settings.rate_limit_max_requests,
            clock=clock,
        ),
        provider_cache=ProviderCache(ttl_seconds=settings.provider_cache_ttl_seconds, clock=clock),
        evm_client_factory=evm_factory,
        solana_client_factory=solana_factory,
        sleep=recording_sleep,
    )
