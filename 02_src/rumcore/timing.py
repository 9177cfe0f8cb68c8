"""Monotonic clock and cancellable timers."""

import asyncio
import time
from typing import Callable, Protocol


def monotonic_ms() -> float:
    """Monotonic time in milliseconds (same source as the asyncio loop clock)."""
    return time.monotonic() * 1000


class ITimer(Protocol):
    """A pending callback that can be cancelled."""

    def cancel(self) -> None:
        ...


class IScheduler(Protocol):
    """Clock plus one-shot timers, both in milliseconds."""

    def now(self) -> float:
        """Current monotonic time in ms."""
        ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> ITimer:
        """Run callback once after delay ms."""
        ...


class AsyncioScheduler:
    """Scheduler backed by the asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def now(self) -> float:
        if self._loop is not None:
            return self._loop.time() * 1000
        return monotonic_ms()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ITimer:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay / 1000, callback)
