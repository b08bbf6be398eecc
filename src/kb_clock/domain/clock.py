"""MatchClock — countdown over a fixed match duration.

The clock never runs by itself: a driver calls tick() on a fixed cadence and
reacts to the expiry signal. Elapsed time is measured against an anchor
instant so that pausing and resuming neither loses nor double-counts time.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from src.kb_common.datetime_utils import format_clock, monotonic_ms

logger = logging.getLogger(__name__)

# 45 s of play is broadcast as a 90 minute match.
BROADCAST_MATCH_MINUTES = 90


@dataclass(frozen=True)
class Remaining:
    minutes: int
    seconds: int

    def display(self) -> str:
        return format_clock(self.minutes, self.seconds)


class MatchClock:
    def __init__(
        self,
        total_duration_ms: int,
        now_fn: Callable[[], int] = monotonic_ms,
    ) -> None:
        if total_duration_ms <= 0:
            raise ValueError(f"total_duration_ms must be positive, got {total_duration_ms}")
        self.total_duration_ms = total_duration_ms
        self.elapsed_ms = 0
        self.running = False
        self.paused = False
        self._now_fn = now_fn
        self._anchor_ms = 0

    def start(self) -> bool:
        """Start counting from the already-elapsed time.

        False if already running or already expired; an expired clock needs reset().
        """
        if self.running or self.elapsed_ms >= self.total_duration_ms:
            return False
        self.running = True
        self.paused = False
        self._anchor_ms = self._now_fn() - self.elapsed_ms
        logger.info("Clock started at elapsed=%dms", self.elapsed_ms)
        return True

    def tick(self, now_ms: int | None = None) -> bool:
        """Advance to `now_ms`. Returns True exactly once, on the tick that expires."""
        if self.paused or not self.running:
            return False
        now = self._now_fn() if now_ms is None else now_ms
        self.elapsed_ms = max(self.elapsed_ms, now - self._anchor_ms)
        if self.elapsed_ms >= self.total_duration_ms:
            self.elapsed_ms = self.total_duration_ms
            self.running = False
            self.paused = False
            logger.info("Clock expired after %dms", self.total_duration_ms)
            return True
        return False

    def pause(self, now_ms: int | None = None) -> None:
        """Freeze the clock, first accounting for time run since the last tick.

        Time is captured but expiry is left for the next tick() to report.
        """
        if not self.running or self.paused:
            return
        now = self._now_fn() if now_ms is None else now_ms
        self.elapsed_ms = min(
            self.total_duration_ms, max(self.elapsed_ms, now - self._anchor_ms)
        )
        self.paused = True
        logger.debug("Clock paused at elapsed=%dms", self.elapsed_ms)

    def resume(self, now_ms: int | None = None) -> None:
        if not self.running or not self.paused:
            return
        now = self._now_fn() if now_ms is None else now_ms
        self._anchor_ms = now - self.elapsed_ms
        self.paused = False
        logger.debug("Clock resumed at elapsed=%dms", self.elapsed_ms)

    def stop(self) -> None:
        self.running = False
        self.paused = False

    def reset(self) -> None:
        self.stop()
        self.elapsed_ms = 0
        self._anchor_ms = 0

    def remaining(self) -> Remaining:
        remaining_ms = max(0, self.total_duration_ms - self.elapsed_ms)
        remaining_s = remaining_ms // 1000
        return Remaining(minutes=remaining_s // 60, seconds=remaining_s % 60)

    def game_minute(self) -> int:
        """Elapsed time on the broadcast scale, 0..90."""
        return self.elapsed_ms * BROADCAST_MATCH_MINUTES // self.total_duration_ms
