"""Timer scheduling for the match engine.

The engine never sleeps. It asks a Scheduler to call it back later (clock
ticks, goal dwell) and reads the current time from the same scheduler so
that clock arithmetic and timers share one time base.
"""
import asyncio
from collections.abc import Callable
from typing import Protocol

from src.kb_common.datetime_utils import monotonic_ms


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def now_ms(self) -> int: ...

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules callbacks on the running event loop."""

    def now_ms(self) -> int:
        return monotonic_ms()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)
