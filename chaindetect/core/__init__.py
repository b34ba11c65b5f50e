"""Core module - configuration, rate limiting, and exceptions."""

from chaindetect.core.config import Settings, get_settings
from chaindetect.core.exceptions import (
    ChainDetectError,
    ChainError,
    ProbeTimeoutError,
    ProviderUnavailableError,
    RateLimitExceededError,
)
from chaindetect.core.rate_limiter import RateLimiter

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Rate limiting
    "RateLimiter",
    # Exceptions
    "ChainDetectError",
    "RateLimitExceededError",
    "ChainError",
    "ProviderUnavailableError",
    "ProbeTimeoutError",
]
