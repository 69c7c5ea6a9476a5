"""Retry logic with exponential backoff using tenacity.

Gateways never retry on their own; retries only happen at the transport
level of an engine client when its configuration asks for more than one
attempt.
"""

import logging
from typing import Type, Tuple

from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_log,
    after_log,
    RetryError,
)

logger = logging.getLogger(__name__)

# Re-export for convenience
__all__ = [
    "engine_retrying",
    "RetryError",
]


def engine_retrying(
    max_attempts: int,
    min_wait: float,
    max_wait: float,
    exceptions: Tuple[Type[BaseException], ...],
) -> AsyncRetrying:
    """
    Build an AsyncRetrying controller for engine transport calls.

    With max_attempts=1 the wrapped block runs exactly once and its
    exception is re-raised unchanged.

    Args:
        max_attempts: Maximum number of attempts
        min_wait: Initial wait between attempts (seconds)
        max_wait: Maximum wait between attempts (seconds)
        exceptions: Tuple of exception types to retry on

    Usage:
        async for attempt in engine_retrying(3, 0.5, 5.0, (httpx.TransportError,)):
            with attempt:
                response = await client.post(url, json=body)
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential_jitter(initial=min_wait, max=max_wait),
        retry=retry_if_exception_type(exceptions),
        before=before_log(logger, logging.DEBUG),
        after=after_log(logger, logging.WARNING),
        reraise=True,
    )
