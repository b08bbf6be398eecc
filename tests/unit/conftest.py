"""Unit-test fixtures: a hand-driven scheduler and recording collaborators."""

import heapq
import random
from collections.abc import Callable
from typing import Any

import pytest

from src.kb_common.enums import MatchPhase
from src.kb_match.domain.models import FieldGeometry
from src.kb_match.engine.state_machine import MatchStateMachine
from src.kb_match.infrastructure.physics import BodyCommandBuffer
from src.kb_wager.domain.ledger import WagerLedger
from src.kb_wager.domain.markets import MarketTable
from src.kb_wager.domain.models import SettlementSummary


class ManualHandle:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Timers fire only when the test advances time; ties fire in scheduling order."""

    def __init__(self) -> None:
        self.now = 0
        self._seq = 0
        self._queue: list[tuple[int, int, ManualHandle]] = []

    def now_ms(self) -> int:
        return self.now

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(callback)
        heapq.heappush(self._queue, (self.now + delay_ms, self._seq, handle))
        self._seq += 1
        return handle

    def advance_to(self, target_ms: int) -> None:
        while self._queue and self._queue[0][0] <= target_ms:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = due
            handle.callback()
        self.now = target_ms

    def advance(self, delta_ms: int) -> None:
        self.advance_to(self.now + delta_ms)

    @property
    def live_timers(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)


class RecordingPresentation:
    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def on_score_changed(self, home: int, away: int) -> None:
        self.events.append(("score", (home, away)))

    def on_time_changed(self, minutes: int, seconds: int) -> None:
        self.events.append(("time", (minutes, seconds)))

    def on_phase_changed(self, phase: MatchPhase) -> None:
        self.events.append(("phase", phase))

    def on_goal(self, message: str) -> None:
        self.events.append(("goal", message))

    def on_settlement(self, summary: SettlementSummary) -> None:
        self.events.append(("settlement", summary))

    def of(self, kind: str) -> list[Any]:
        return [payload for k, payload in self.events if k == kind]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def presentation() -> RecordingPresentation:
    return RecordingPresentation()


@pytest.fixture
def physics() -> BodyCommandBuffer:
    return BodyCommandBuffer()


@pytest.fixture
def make_machine(
    scheduler: ManualScheduler,
    presentation: RecordingPresentation,
    physics: BodyCommandBuffer,
) -> Callable[..., MatchStateMachine]:
    def _make(**kwargs: Any) -> MatchStateMachine:
        defaults: dict[str, Any] = {
            "ledger": WagerLedger(10_000),
            "markets": MarketTable(),
            "physics": physics,
            "presentation": presentation,
            "scheduler": scheduler,
            "field": FieldGeometry(340.0, 525.0),
            "match_duration_ms": 45_000,
            "goal_dwell_ms": 2_000,
            "tick_interval_ms": 100,
            "stake": 100,
            "rng": random.Random(42),
        }
        defaults.update(kwargs)
        return MatchStateMachine(**defaults)

    return _make
