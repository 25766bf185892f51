"""
Admission control for concurrent route renders.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")


class ConcurrencyLimiter:
    """
    Bounds how many coroutines run at once, first come first served.

    A limit of 0 (or below) means unbounded: every call runs immediately.

    Attributes:
        limit (int): Maximum in-flight calls, 0 for no cap.
        active (int): Calls currently running.
        peak (int): Highest number of calls observed running together.
    """
    def __init__(self, limit: int = 0):
        self.limit = limit
        self.active = 0
        self.peak = 0
        self._semaphore: Optional[asyncio.Semaphore] = asyncio.Semaphore(limit) if limit > 0 else None

    async def run(self, fn: Callable[..., Awaitable[T]], *args: Any) -> T:
        if self._semaphore is None:
            return await self._track(fn, *args)
        async with self._semaphore:
            return await self._track(fn, *args)

    async def _track(self, fn: Callable[..., Awaitable[T]], *args: Any) -> T:
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            return await fn(*args)
        finally:
            self.active -= 1
