"""Resilience patterns for engine calls."""

from voiceforge.core.resilience.retry import (
    engine_retrying,
    RetryError,
)
from voiceforge.core.resilience.timeout import (
    OperationTimeout,
    async_timeout,
)

__all__ = [
    # Retry
    "engine_retrying",
    "RetryError",
    # Timeout
    "OperationTimeout",
    "async_timeout",
]
