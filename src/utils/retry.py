"""
Backoff-Retry Wrapper

The only retry policy in the pipeline. Retries a single async operation
when the remote service reports a rate limit (HTTP 429 / RESOURCE_EXHAUSTED),
doubling the delay each time. No jitter and no cap: the attempt budget is
the only bound. Anything else propagates unchanged.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRIES = 3
DEFAULT_DELAY_MS = 2000

RATE_LIMIT_STATUS = "RESOURCE_EXHAUSTED"


def is_rate_limit_error(error: BaseException) -> bool:
    """
    Check an exception for a rate-limit signature.

    google-genai's APIError exposes ``code`` (int) and ``status`` (str);
    other transports may put 429 in ``status`` or only in the message.
    """
    for attr in ("status", "code", "status_code"):
        value = getattr(error, attr, None)
        if value == 429 or value == RATE_LIMIT_STATUS:
            return True
    return "429" in str(error)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    retries: int = DEFAULT_RETRIES,
    delay_ms: int = DEFAULT_DELAY_MS,
) -> T:
    """
    Run ``operation``, retrying on rate-limit errors.

    Args:
        operation: Zero-argument factory returning a fresh awaitable per attempt
        retries: Number of retries after the first attempt
        delay_ms: Delay before the first retry; doubled after each retry

    Returns:
        The operation's result

    Raises:
        The original exception for non-rate-limit failures or once
        retries are exhausted
    """
    while True:
        try:
            return await operation()
        except Exception as e:
            if retries <= 0 or not is_rate_limit_error(e):
                raise
            logger.warning(
                f"Rate limit hit. Retrying in {delay_ms}ms "
                f"({retries} retries left): {e}"
            )
            await asyncio.sleep(delay_ms / 1000)
            retries -= 1
            delay_ms *= 2
