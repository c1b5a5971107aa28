"""
Delayed-callback scheduling for debounced search.

A Scheduler runs a callback after a delay on a single cooperative event
loop and hands back a handle whose cancel() prevents it from firing.
"""

import asyncio
from typing import Callable, Optional, Protocol


class CancelHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, callback: Callable[[], None], delay_ms: int) -> CancelHandle: ...


class AsyncioScheduler:
    """Schedules callbacks with loop.call_later on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, callback: Callable[[], None], delay_ms: int) -> asyncio.TimerHandle:
        return self.loop.call_later(max(delay_ms, 0) / 1000.0, callback)
