"""Bounded poll: check a condition on a fixed interval until it holds."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import time

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]
Check = Callable[[], Awaitable[bool]]


async def poll_until(
    check: Check,
    *,
    interval: float,
    deadline: float | None = None,
    clock: Clock = time.monotonic,
    sleep: Sleep = asyncio.sleep,
) -> bool:
    """Await ``check`` every ``interval`` seconds until it returns True.

    The deadline is tested before every check, so no check starts at or after
    it. With ``deadline=None`` the loop only ends when ``check`` succeeds.

    Args:
        check: Async predicate; exceptions are not caught here
        interval: Seconds to sleep after a failed check
        deadline: Absolute ``clock()`` value after which to give up
        clock: Monotonic time source
        sleep: Cooperative sleep

    Returns:
        True if the check succeeded, False if the deadline passed first
    """
    while True:
        if deadline is not None and clock() >= deadline:
            return False
        if await check():
            return True
        await sleep(interval)
