"""Chain Detection Service - Route an address or hash to its network.

This service handles:
1. Token checks - SPL token mints on Solana, ERC-20 contracts on EVM chains
2. Wallet activity - which EVM chain an address has transacted on
3. Transaction lookup - which chain a transaction hash belongs to
4. Identification - combine the above into a single DetectionResult

Every check fans out across chains concurrently and reduces the results in
fixed chain order, so the answer never depends on which endpoint replied
first.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from chaindetect.blockchain.base import (
    EVM_CHAINS,
    AddressType,
    ChainId,
    DetectionResult,
    EVMClientInterface,
    SolanaClientInterface,
    TokenCheckResult,
)
from chaindetect.blockchain.factory import create_evm_client, create_solana_client
from chaindetect.blockchain.probes import (
    probe_evm_nonce,
    probe_evm_token,
    probe_solana_token,
    probe_transaction,
)
from chaindetect.blockchain.provider import ProviderCache, ProviderResolver
from chaindetect.core.config import Settings, get_settings
from chaindetect.core.exceptions import RateLimitExceededError
from chaindetect.core.rate_limiter import RateLimiter
from chaindetect.utils.validation import (
    is_evm_address,
    is_evm_transaction_hash,
    is_solana_address,
    is_solana_signature,
    is_transaction_hash,
)

logger = logging.getLogger(__name__)

# Rate limit keys
SOLANA_RATE_KEY = "solana"
EVM_RATE_KEY = "evm"
EVM_NONCE_RATE_KEY = "evm-nonce"


class ChainDetectionService:
    """Service for multi-chain address and transaction detection."""

    def __init__(
        self,
        settings: Settings | None = None,
        rate_limiter: RateLimiter | None = None,
        provider_cache: ProviderCache | None = None,
        evm_client_factory: Callable[[str], EVMClientInterface] = create_evm_client,
        solana_client_factory: Callable[[str], SolanaClientInterface] = create_solana_client,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.settings = settings if settings is not None else get_settings()
        if rate_limiter is None:
            rate_limiter = RateLimiter(
                window_seconds=self.settings.rate_limit_window_seconds,
                max_requests=self.settings.rate_limit_max_requests,
            )
        self.rate_limiter = rate_limiter
        if provider_cache is None:
            provider_cache = ProviderCache(ttl_seconds=self.settings.provider_cache_ttl_seconds)
        self.provider_cache = provider_cache
        self.resolver = ProviderResolver(
            cache=self.provider_cache,
            client_factory=evm_client_factory,
            timeout_seconds=self.settings.rpc_timeout_seconds,
            backoff_initial_seconds=self.settings.backoff_initial_seconds,
            backoff_max_seconds=self.settings.backoff_max_seconds,
            backoff_factor=self.settings.backoff_factor,
            sleep=sleep,
        )
        self._evm_client_factory = evm_client_factory
        self._solana_client_factory = solana_client_factory
        self._timeout = self.settings.rpc_timeout_seconds

    def _enforce_rate_limit(self, key: str) -> None:
        """Raise if ``key`` is over quota for the current window."""
        if not self.rate_limiter.check(key):
            raise RateLimitExceededError(key)

    # ============ Token Checks ============

    async def check_solana_token(self, address: str) -> bool:
        """Check whether a Solana address is an SPL token mint.

        Queries the top Solana endpoints in parallel with fresh clients;
        any positive answer wins.

        Args:
            address: Solana address (base58)

        Returns:
            True if any endpoint reports a token-program owned account

        Raises:
            RateLimitExceededError: If the "solana" key is over quota
        """
        self._enforce_rate_limit(SOLANA_RATE_KEY)

        count = self.settings.solana_token_rpc_count
        endpoints = self.settings.endpoints_for(ChainId.SOLANA)[:count]
        results = await asyncio.gather(
            *(self._probe_solana_endpoint(endpoint, address) for endpoint in endpoints)
        )
        return any(results)

    async def _probe_solana_endpoint(self, endpoint: str, address: str) -> bool:
        try:
            client = self._solana_client_factory(endpoint)
        except Exception as e:
            logger.debug(f"Failed to create Solana client for {endpoint}: {e}")
            return False
        try:
            return await probe_solana_token(client, address, self._timeout)
        finally:
            await client.close()

    async def check_evm_token(self, address: str) -> TokenCheckResult:
        """Find the EVM chain on which an address is an ERC-20 token.

        Args:
            address: EVM address (0x...)

        Returns:
            TokenCheckResult with the first positive chain in
            (ethereum, bsc, base) order, or (None, False)

        Raises:
            RateLimitExceededError: If the "evm" key is over quota
        """
        self._enforce_rate_limit(EVM_RATE_KEY)

        results = await asyncio.gather(
            *(self._check_chain(chain, address, probe_evm_token) for chain in EVM_CHAINS)
        )
        for chain, is_token in zip(EVM_CHAINS, results):
            if is_token:
                logger.info(f"{address} is a token on {chain.value}")
                return TokenCheckResult(chain=chain, is_token=True)
        return TokenCheckResult(chain=None, is_token=False)

    # ============ Wallet Activity ============

    async def check_evm_nonce(self, address: str) -> ChainId | None:
        """Find the first EVM chain on which an address has sent a transaction.

        Args:
            address: EVM address (0x...)

        Returns:
            ChainId, or None if the address has no activity anywhere

        Raises:
            RateLimitExceededError: If the "evm-nonce" key is over quota
        """
        self._enforce_rate_limit(EVM_NONCE_RATE_KEY)

        results = await asyncio.gather(
            *(self._check_chain(chain, address, probe_evm_nonce) for chain in EVM_CHAINS)
        )
        for chain, active in zip(EVM_CHAINS, results):
            if active:
                return chain
        return None

    async def _check_chain(
        self,
        chain: ChainId,
        address: str,
        probe: Callable[[EVMClientInterface, str, float], Awaitable[bool]],
    ) -> bool:
        """Resolve a provider for ``chain`` and run ``probe`` against it."""
        client = await self.resolver.resolve(self.settings.endpoints_for(chain))
        if client is None:
            logger.warning(f"{chain.value} unreachable, treating {probe.__name__} as negative")
            return False
        return await probe(client, address, self._timeout)

    # ============ Transaction Lookup ============

    async def detect_transaction_chain(self, tx_hash: str) -> ChainId:
        """Detect which chain a transaction hash belongs to.

        Solana signatures are recognised by format alone, without any RPC
        call, so a well-formed but non-existent signature still reports
        "solana". EVM hashes are looked up on every EVM chain concurrently.

        Args:
            tx_hash: Transaction hash or signature

        Returns:
            ChainId, ChainId.UNKNOWN if not found or malformed
        """
        try:
            if not is_transaction_hash(tx_hash):
                return ChainId.UNKNOWN

            if is_solana_signature(tx_hash):
                return ChainId.SOLANA

            if not is_evm_transaction_hash(tx_hash):
                return ChainId.UNKNOWN

            results = await asyncio.gather(
                *(self._find_transaction_on_chain(chain, tx_hash) for chain in EVM_CHAINS),
                return_exceptions=True,
            )
        except Exception as e:
            logger.error(f"Transaction detection failed for {tx_hash!r}: {e}")
            return ChainId.UNKNOWN

        for chain, found in zip(EVM_CHAINS, results):
            if isinstance(found, BaseException):
                logger.error(f"Transaction lookup on {chain.value} failed: {found}")
                continue
            if found:
                return chain
        return ChainId.UNKNOWN

    async def _find_transaction_on_chain(self, chain: ChainId, tx_hash: str) -> bool:
        """Race the top endpoints of one chain for a transaction."""
        endpoints = self.settings.endpoints_for(chain)[: self.settings.transaction_rpc_count]
        results = await asyncio.gather(
            *(self._probe_transaction_endpoint(endpoint, tx_hash) for endpoint in endpoints)
        )
        return any(results)

    async def _probe_transaction_endpoint(self, endpoint: str, tx_hash: str) -> bool:
        try:
            client = self._evm_client_factory(endpoint)
        except Exception as e:
            logger.debug(f"Failed to create EVM client for {endpoint}: {e}")
            return False
        try:
            return await probe_transaction(client, tx_hash, self._timeout)
        finally:
            await client.close()

    # ============ Identification ============

    async def identify(self, value: str) -> DetectionResult:
        """Identify the chain and entity type of a pasted string.

        Args:
            value: Address, transaction hash or signature

        Returns:
            DetectionResult

        Raises:
            RateLimitExceededError: If an underlying check is over quota
        """
        value = value.strip()

        if is_transaction_hash(value):
            chain = await self.detect_transaction_chain(value)
            return DetectionResult(
                chain=None if chain == ChainId.UNKNOWN else chain,
                address_type=AddressType.UNKNOWN,
                is_transaction=True,
            )

        if is_evm_address(value):
            token = await self.check_evm_token(value)
            if token.is_token:
                return DetectionResult(
                    chain=token.chain, address_type=AddressType.TOKEN, is_transaction=False
                )
            chain = await self.check_evm_nonce(value)
            return DetectionResult(
                chain=chain, address_type=AddressType.WALLET, is_transaction=False
            )

        if is_solana_address(value):
            is_token = await self.check_solana_token(value)
            return DetectionResult(
                chain=ChainId.SOLANA,
                address_type=AddressType.TOKEN if is_token else AddressType.WALLET,
                is_transaction=False,
            )

        return DetectionResult(chain=None, address_type=AddressType.UNKNOWN, is_transaction=False)

    async def close(self) -> None:
        """Close every cached provider connection and empty the cache."""
        for client in self.provider_cache.clear():
            await client.close()


# Singleton instance
_detection_service: ChainDetectionService | None = None


def get_detection_service() -> ChainDetectionService:
    """Get chain detection service singleton."""
    global _detection_service
    if _detection_service is None:
        _detection_service = ChainDetectionService()
    return _detection_service


async def close_detection_service() -> None:
    """Close and drop the singleton."""
    global _detection_service
    if _detection_service is not None:
        await _detection_service.close()
        _detection_service = None
