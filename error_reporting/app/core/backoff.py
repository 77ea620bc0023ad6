"""Backoff utilities.

`fixed_backoff` yields the attempt number for the caller to attempt an operation,
then sleeps for the fixed delay before the next attempt. Breaking out of the loop
after a successful attempt skips the remaining sleeps.
"""
import asyncio
from typing import AsyncIterator


async def fixed_backoff(delay: float, max_attempts: int) -> AsyncIterator[int]:
    for attempt in range(1, max_attempts + 1):
        yield attempt
        if attempt < max_attempts and delay > 0:
            await asyncio.sleep(delay)
