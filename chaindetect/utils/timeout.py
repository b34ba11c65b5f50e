"""Race a remote call against a timer."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from chaindetect.core.exceptions import ProbeTimeoutError

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], seconds: float) -> T:
    """Await ``awaitable`` for at most ``seconds``.

    The pending call is cancelled when the timer wins.

    Args:
        awaitable: Remote call to bound
        seconds: Time limit

    Returns:
        Result of the awaitable

    Raises:
        ProbeTimeoutError: If the time limit is exceeded
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        raise ProbeTimeoutError(
            f"Call timed out after {seconds}s", {"timeout": seconds}
        ) from e
