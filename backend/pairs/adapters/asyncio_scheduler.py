"""Scheduler adapter backed by the asyncio event loop."""

import asyncio
import time
from collections.abc import Callable


class AsyncioScheduler:
    """Scheduler implementation on top of loop.call_later.

    The loop is resolved lazily so one instance can be created at import
    or startup time and used from request handlers later. The returned
    asyncio.TimerHandle already satisfies ScheduledHandle.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self._get_loop().call_later(delay_sec, callback)

    def time(self) -> float:
        return time.monotonic()
