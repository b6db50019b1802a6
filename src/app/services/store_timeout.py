"""
Store call bounding

Every use case runs its unit of work under a deadline. Hitting it cancels the
in-flight store call; the unit of work then rolls back on exit, so nothing is
half-applied. The timeout surfaces as STORE_TIMEOUT, never as a security
decision.
"""

import asyncio
import logging
from typing import Awaitable

from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

STORE_TIMEOUT = "STORE_TIMEOUT"


async def bounded(operation: Awaitable[Result], seconds: float, name: str) -> Result:
    try:
        async with asyncio.timeout(seconds):
            return await operation
    except TimeoutError:
        logger.error(f"Store timeout after {seconds}s in {name}")
        return Return.err(Error(STORE_TIMEOUT, "Data store did not respond in time"))
