import asyncio

import pytest

from src.app.services.store_timeout import STORE_TIMEOUT, bounded
from src.libs.result import Return


@pytest.mark.asyncio
async def test_fast_operation_passes_result_through():
    async def operation():
        return Return.ok(42)

    result = await bounded(operation(), 1.0, "fast")

    assert result.is_ok()
    assert result.value == 42


@pytest.mark.asyncio
async def test_slow_operation_becomes_store_timeout():
    async def operation():
        await asyncio.sleep(1)
        return Return.ok(None)

    result = await bounded(operation(), 0.01, "slow")

    assert result.is_err()
    assert result.error.code == STORE_TIMEOUT
