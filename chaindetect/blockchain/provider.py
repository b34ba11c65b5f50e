"""Provider selection with caching and exponential backoff.

A resolver walks an ordered endpoint list and hands back the first live
client. Recently healthy endpoints are remembered so repeated lookups skip
the connectivity handshake.
"""

import asyncio
import logging
import threading
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from chaindetect.blockchain.base import EVMClientInterface
from chaindetect.core.exceptions import ProviderUnavailableError
from chaindetect.utils.timeout import with_timeout

logger = logging.getLogger(__name__)


@dataclass
class ProviderCacheEntry:
    """A connected client and when it was last proven live."""

    client: EVMClientInterface
    timestamp: float


class ProviderCache:
    """Endpoint -> live client map with passive TTL expiry.

    Expiry does not evict: a stale entry is ignored until a fresher
    connection to the same endpoint replaces it, or the cache is cleared.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, ProviderCacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, endpoint: str) -> EVMClientInterface | None:
        """Return the cached client for ``endpoint`` if still fresh."""
        with self._lock:
            entry = self._entries.get(endpoint)
            if entry is None:
                return None
            if self._clock() - entry.timestamp >= self.ttl_seconds:
                return None
            return entry.client

    def put(self, endpoint: str, client: EVMClientInterface) -> EVMClientInterface | None:
        """Record a successful connection.

        Returns:
            The client previously cached for ``endpoint``, if any. The
            caller owns it and is responsible for closing it.
        """
        with self._lock:
            previous = self._entries.get(endpoint)
            self._entries[endpoint] = ProviderCacheEntry(client=client, timestamp=self._clock())
        if previous is None or previous.client is client:
            return None
        return previous.client

    def clear(self) -> list[EVMClientInterface]:
        """Drop every entry and hand back the clients, fresh or stale."""
        with self._lock:
            clients = [entry.client for entry in self._entries.values()]
            self._entries.clear()
        return clients

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ProviderResolver:
    """Resolve a live EVM client from an ordered endpoint list.

    Workflow:
    1. Cache scan in list order (no network)
    2. Connect to each endpoint in order, bounded by ``timeout_seconds``
    3. Back off between failures: initial, x factor, capped at max

    Usage:
        resolver = ProviderResolver(cache, create_evm_client)
        client = await resolver.resolve(settings.endpoints_for(ChainId.BSC))
    """

    def __init__(
        self,
        cache: ProviderCache,
        client_factory: Callable[[str], EVMClientInterface],
        timeout_seconds: float = 10.0,
        backoff_initial_seconds: float = 0.1,
        backoff_max_seconds: float = 1.0,
        backoff_factor: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.cache = cache
        self._client_factory = client_factory
        self.timeout_seconds = timeout_seconds
        self.backoff_initial_seconds = backoff_initial_seconds
        self.backoff_max_seconds = backoff_max_seconds
        self.backoff_factor = backoff_factor
        self._sleep = sleep
        self._locks: dict[tuple[str, ...], asyncio.Lock] = {}

    async def resolve(
        self,
        endpoints: Sequence[str],
        use_cache: bool = True,
    ) -> EVMClientInterface | None:
        """Get a connected client for the first reachable endpoint.

        Concurrent calls for the same endpoint list run one at a time, so a
        cold cache is filled once and later callers get the cached client.

        Args:
            endpoints: Endpoint URLs in preference order
            use_cache: Return a fresh cached client without any network call

        Returns:
            Live client, or None if every endpoint failed
        """
        lock = self._locks.setdefault(tuple(endpoints), asyncio.Lock())
        async with lock:
            return await self._resolve(endpoints, use_cache)

    async def _resolve(
        self,
        endpoints: Sequence[str],
        use_cache: bool,
    ) -> EVMClientInterface | None:
        if use_cache:
            for endpoint in endpoints:
                client = self.cache.get(endpoint)
                if client is not None:
                    logger.debug(f"Provider cache hit: {endpoint}")
                    return client

        backoff = self.backoff_initial_seconds
        for index, endpoint in enumerate(endpoints):
            try:
                client = await self._connect(endpoint)
            except ProviderUnavailableError as e:
                logger.debug(f"Endpoint unavailable: {endpoint}: {e.details.get('error')}")
                if index < len(endpoints) - 1:
                    await self._sleep(min(backoff, self.backoff_max_seconds))
                    backoff *= self.backoff_factor
                continue

            replaced = self.cache.put(endpoint, client)
            if replaced is not None:
                logger.debug(f"Closing superseded client for {endpoint}")
                await replaced.close()
            logger.info(f"Connected to {endpoint}")
            return client

        logger.warning(f"All {len(endpoints)} endpoints failed: {list(endpoints)}")
        return None

    async def _connect(self, endpoint: str) -> EVMClientInterface:
        """Build a client and prove the endpoint is live.

        Raises:
            ProviderUnavailableError: If the connectivity check fails or times out
        """
        try:
            client = self._client_factory(endpoint)
        except Exception as e:
            raise ProviderUnavailableError(
                f"Cannot create client for {endpoint}",
                {"endpoint": endpoint, "error": str(e) or type(e).__name__},
            ) from e

        try:
            await with_timeout(client.get_network(), self.timeout_seconds)
        except Exception as e:
            await client.close()
            raise ProviderUnavailableError(
                f"Endpoint unavailable: {endpoint}",
                {"endpoint": endpoint, "error": str(e) or type(e).__name__},
            ) from e
        return client
