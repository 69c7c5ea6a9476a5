"""Timeout patterns for async engine calls."""

import asyncio
import logging
from typing import Awaitable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationTimeout(Exception):
    """Raised when operation exceeds timeout."""

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(
            f"Operation '{operation}' timed out after {timeout:.1f}s"
        )


async def async_timeout(
    coro: Awaitable[T],
    timeout: float,
    operation: str = "operation",
) -> T:
    """
    Execute coroutine with timeout.

    Args:
        coro: Coroutine to execute
        timeout: Timeout in seconds
        operation: Operation name for error message

    Returns:
        Result of coroutine

    Raises:
        OperationTimeout: If operation exceeds timeout
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"Timeout: {operation} exceeded {timeout}s")
        raise OperationTimeout(operation, timeout) from None
