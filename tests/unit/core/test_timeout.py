"""Tests for timeout patterns."""

import pytest
import asyncio
from voiceforge.core.resilience import OperationTimeout, async_timeout


class TestAsyncTimeout:
    @pytest.mark.asyncio
    async def test_completes_within_timeout(self):
        async def quick_task():
            return "done"

        result = await async_timeout(quick_task(), timeout=1.0)
        assert result == "done"

    @pytest.mark.asyncio
    async def test_raises_on_timeout(self):
        async def slow_task():
            await asyncio.sleep(1.0)
            return "done"

        with pytest.raises(OperationTimeout) as exc_info:
            await async_timeout(slow_task(), timeout=0.1, operation="slow_op")

        assert exc_info.value.operation == "slow_op"
        assert exc_info.value.timeout == 0.1
        assert "slow_op" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_propagates_inner_errors(self):
        async def failing_task():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            await async_timeout(failing_task(), timeout=1.0)
