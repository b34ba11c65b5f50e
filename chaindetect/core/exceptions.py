"""Chain Detect - Custom exceptions."""

from typing import Any


class ChainDetectError(Exception):
    """Base exception for all chain detection errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class RateLimitExceededError(ChainDetectError):
    """Too many requests for an operation key within the current window.

    The caller should back off and retry later; it is never retried internally.
    """

    def __init__(
        self,
        key: str,
        message: str = "Rate limit exceeded. Please try again later.",
    ) -> None:
        self.key = key
        super().__init__(message, {"key": key})


class ChainError(ChainDetectError):
    """Blockchain interaction error."""

    pass


class ProviderUnavailableError(ChainError):
    """An RPC endpoint could not be reached."""

    pass


class ProbeTimeoutError(ChainError):
    """A single remote call exceeded its time bound."""

    pass
