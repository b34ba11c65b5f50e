"""Chain Detect - Fixed-window rate limiter.

Guards outbound probe volume per logical operation key
(e.g. "solana", "evm", "evm-nonce"). Single-process and best-effort:
nothing is persisted and nothing is shared across instances.
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RateLimitEntry:
    """Request count for one key within its current window."""

    count: int
    reset_at: float


class RateLimiter:
    """Fixed-window counter per key.

    A window starts on the first request for a key and is replaced (not
    decayed) once ``reset_at`` has passed. ``check`` never blocks.

    Usage:
        limiter = RateLimiter(window_seconds=60, max_requests=30)
        if not limiter.check("evm"):
            raise RateLimitExceededError("evm")
    """

    def __init__(
        self,
        window_seconds: float = 60.0,
        max_requests: int = 30,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def check(self, key: str) -> bool:
        """Count a request against ``key``.

        Args:
            key: Operation key

        Returns:
            True if the request is allowed, False if the key is over quota
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)

            if entry is None or now >= entry.reset_at:
                self._entries[key] = RateLimitEntry(count=1, reset_at=now + self.window_seconds)
                return True

            if entry.count >= self.max_requests:
                logger.warning(
                    f"Rate limit hit for '{key}': {entry.count}/{self.max_requests}, "
                    f"resets in {entry.reset_at - now:.1f}s"
                )
                return False

            entry.count += 1
            return True

    def get_entry(self, key: str) -> RateLimitEntry | None:
        """Return a snapshot of the current window for ``key``."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return RateLimitEntry(count=entry.count, reset_at=entry.reset_at)

    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when ``key`` is None."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)
