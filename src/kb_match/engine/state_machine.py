"""MatchStateMachine — single owner of phase, score, clock and wager ledger.

Phases:
  IDLE -> AWAITING_KICKOFF     wagers confirmed
  AWAITING_KICKOFF -> RUNNING  kickoff velocity assigned
  RUNNING -> PAUSED_FOR_GOAL   goal honoured
  PAUSED_FOR_GOAL -> RUNNING   dwell elapsed, ball respawned
  RUNNING/PAUSED -> ENDED      clock expired or reset mid-match
  any -> IDLE                  reset

All methods run synchronously on one thread. Timer callbacks capture the
epoch current when they were scheduled and do nothing once a reset has
advanced it.
"""
import logging
import random
from dataclasses import dataclass

from src.kb_clock.domain.clock import MatchClock, Remaining
from src.kb_common.enums import GoalSide, Market, MatchPhase, SelectionChange
from src.kb_common.errors import BetsClosedError, IllegalTransitionError
from src.kb_match.domain.kickoff import draw_kickoff_velocity
from src.kb_match.domain.models import BALL_LABEL, Contact, FieldGeometry, Score, Vector
from src.kb_match.domain.ports import PhysicsPort, PresentationPort
from src.kb_match.engine.goal_pipeline import GOAL_MESSAGES, GoalReactionPipeline
from src.kb_match.engine.scheduler import Scheduler, TimerHandle
from src.kb_wager.domain.ledger import WagerLedger
from src.kb_wager.domain.markets import MarketTable
from src.kb_wager.domain.models import SettlementSummary, WagerGroup, WagerSelection
from src.kb_wager.domain.outcome import evaluate

logger = logging.getLogger(__name__)

_BETS_OPEN = (MatchPhase.IDLE, MatchPhase.AWAITING_KICKOFF)
_LIVE = (MatchPhase.RUNNING, MatchPhase.PAUSED_FOR_GOAL)
_STOPPED = Vector(0.0, 0.0)


@dataclass(frozen=True)
class MatchSnapshot:
    """Read-only view handed to collaborators."""

    phase: MatchPhase
    home: int
    away: int
    remaining: Remaining
    game_minute: int
    balance: int
    pending: list[WagerSelection]
    potential_payout: int
    epoch: int

    @property
    def bets_open(self) -> bool:
        return self.phase in _BETS_OPEN


class MatchStateMachine:
    def __init__(
        self,
        *,
        ledger: WagerLedger,
        markets: MarketTable,
        physics: PhysicsPort,
        presentation: PresentationPort,
        scheduler: Scheduler,
        field: FieldGeometry,
        match_duration_ms: int,
        goal_dwell_ms: int = 2000,
        tick_interval_ms: int = 100,
        stake: int = 100,
        rng: random.Random | None = None,
        auto_kickoff: bool = True,
        pipeline: GoalReactionPipeline | None = None,
    ) -> None:
        self.ledger = ledger
        self.markets = markets
        self.clock = MatchClock(match_duration_ms, now_fn=scheduler.now_ms)
        self.score = Score()
        self.phase = MatchPhase.IDLE
        self.field = field
        self.stake = stake
        self.auto_kickoff = auto_kickoff
        self.goal_dwell_ms = goal_dwell_ms
        self.tick_interval_ms = tick_interval_ms
        self.last_settlement: SettlementSummary | None = None
        self._physics = physics
        self._presentation = presentation
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._pipeline = pipeline or GoalReactionPipeline()
        self._epoch = 0
        self._dwell_handle: TimerHandle | None = None
        self._tick_handle: TimerHandle | None = None
        self._last_remaining: Remaining | None = None

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def bets_open(self) -> bool:
        return self.phase in _BETS_OPEN

    # ------------------------------------------------------------------
    # Wager commands
    # ------------------------------------------------------------------

    def select_wager(self, market: Market | str, outcome: str) -> SelectionChange:
        self._require_bets_open()
        odds = self.markets.odds_for(market, outcome)
        return self.ledger.select(Market(market), outcome, odds, self.stake)

    def clear_wagers(self) -> None:
        self._require_bets_open()
        self.ledger.clear_pending()

    def confirm_wagers(self) -> WagerGroup:
        """Stake the pending selections and, by default, kick off straight away."""
        self._require_bets_open()
        group = self.ledger.confirm()
        self.last_settlement = None
        if self.phase == MatchPhase.IDLE:
            self._set_phase(MatchPhase.AWAITING_KICKOFF)
        if self.auto_kickoff:
            self.kickoff()
        return group

    # ------------------------------------------------------------------
    # Match flow
    # ------------------------------------------------------------------

    def kickoff(self) -> Vector:
        if self.phase != MatchPhase.AWAITING_KICKOFF:
            raise IllegalTransitionError("kick off", self.phase.value)
        velocity = draw_kickoff_velocity(self._rng)
        self._physics.set_velocity(BALL_LABEL, velocity)
        self._set_phase(MatchPhase.RUNNING)
        self.clock.start()
        self._schedule_tick()
        logger.info("Kickoff with velocity (%.1f, %.1f)", velocity.x, velocity.y)
        return velocity

    def tick(self, now_ms: int | None = None) -> bool:
        """Advance the clock. Returns True on the tick that ends the match."""
        if self.phase not in _LIVE:
            return False
        expired = self.clock.tick(now_ms)
        self._publish_time()
        if expired:
            self._finish()
        return expired

    def handle_contacts(self, contacts: list[Contact], now_ms: int | None = None) -> int:
        """Feed collision-start pairs through the goal pipeline. Returns goals honoured.

        The clock is ticked first so a contact arriving after full time is never scored.
        """
        self.tick(now_ms)
        goals = 0
        for contact in contacts:
            side = self._pipeline.apply(contact, self.phase, self.score)
            if side is not None:
                goals += 1
                self._on_goal(side)
        return goals

    def process_step(self, contacts: list[Contact], now_ms: int | None = None) -> int:
        """One physics step; same as handle_contacts."""
        return self.handle_contacts(contacts, now_ms)

    def reset(self) -> None:
        """Back to IDLE. A live match is ended and settled first."""
        if self.phase in _LIVE:
            self._finish()
        self._epoch += 1
        self._cancel_timers()
        self.clock.reset()
        self.score.reset()
        self.ledger.clear_pending()
        self._last_remaining = None
        self._physics.set_position(BALL_LABEL, self.field.center)
        self._physics.set_velocity(BALL_LABEL, _STOPPED)
        self._set_phase(MatchPhase.IDLE)
        self._presentation.on_score_changed(0, 0)
        self._publish_time()
        logger.info("Session reset (epoch=%d)", self._epoch)

    def halt(self) -> None:
        """Cancel outstanding timers without touching match state."""
        self._epoch += 1
        self._cancel_timers()

    def snapshot(self) -> MatchSnapshot:
        return MatchSnapshot(
            phase=self.phase,
            home=self.score.home,
            away=self.score.away,
            remaining=self.clock.remaining(),
            game_minute=self.clock.game_minute(),
            balance=self.ledger.balance,
            pending=self.ledger.pending,
            potential_payout=self.ledger.potential_payout,
            epoch=self._epoch,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_bets_open(self) -> None:
        if not self.bets_open:
            raise BetsClosedError(self.phase.value)

    def _set_phase(self, phase: MatchPhase) -> None:
        if phase == self.phase:
            return
        logger.debug("Phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase
        self._presentation.on_phase_changed(phase)

    def _publish_time(self) -> None:
        remaining = self.clock.remaining()
        if remaining != self._last_remaining:
            self._last_remaining = remaining
            self._presentation.on_time_changed(remaining.minutes, remaining.seconds)

    def _on_goal(self, side: GoalSide) -> None:
        self.clock.pause()
        self._set_phase(MatchPhase.PAUSED_FOR_GOAL)
        self._presentation.on_score_changed(self.score.home, self.score.away)
        self._presentation.on_goal(GOAL_MESSAGES[side])

        epoch = self._epoch

        def _dwell_elapsed() -> None:
            if epoch != self._epoch:
                return
            self._dwell_handle = None
            self._resume_after_goal()

        self._dwell_handle = self._scheduler.call_later(self.goal_dwell_ms, _dwell_elapsed)

    def _resume_after_goal(self) -> None:
        if self.phase != MatchPhase.PAUSED_FOR_GOAL:
            return
        velocity = draw_kickoff_velocity(self._rng)
        self._physics.set_position(BALL_LABEL, self.field.center)
        self._physics.set_velocity(BALL_LABEL, velocity)
        self.clock.resume()
        self._set_phase(MatchPhase.RUNNING)
        logger.info("Play resumed, respawn velocity (%.1f, %.1f)", velocity.x, velocity.y)

    def _schedule_tick(self) -> None:
        epoch = self._epoch

        def _on_tick() -> None:
            if epoch != self._epoch:
                return
            self._tick_handle = None
            self.tick()
            if self.phase in _LIVE:
                self._schedule_tick()

        self._tick_handle = self._scheduler.call_later(self.tick_interval_ms, _on_tick)

    def _cancel_timers(self) -> None:
        for handle in (self._dwell_handle, self._tick_handle):
            if handle is not None:
                handle.cancel()
        self._dwell_handle = None
        self._tick_handle = None

    def _finish(self) -> None:
        self._cancel_timers()
        self.clock.stop()
        self._set_phase(MatchPhase.ENDED)
        self._physics.set_velocity(BALL_LABEL, _STOPPED)

        outcome = evaluate(self.score.home, self.score.away, self.markets.total_line)
        groups = self.ledger.settle(outcome)
        summary = SettlementSummary(
            home=self.score.home,
            away=self.score.away,
            result_banner=outcome.banner,
            groups=groups,
            balance_after=self.ledger.balance,
        )
        self.last_settlement = summary
        logger.info(
            "Match ended %d-%d, %d group(s) settled",
            self.score.home, self.score.away, len(groups),
        )
        self._presentation.on_settlement(summary)
