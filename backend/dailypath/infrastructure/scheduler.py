"""Asyncio Scheduler — one-shot timers on the running event loop.

Invariants:
    - call_later must be invoked from inside a running loop
    - Returned handles are asyncio.TimerHandle; cancel() is idempotent
"""

import asyncio
from collections.abc import Callable


class AsyncioScheduler:
    """Scheduler protocol over loop.call_later."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
