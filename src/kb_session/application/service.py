"""SessionService — thin composition layer over MatchStateMachine.

Every command returns a CommandResult. Expected conditions (empty selection,
insufficient balance, betting closed) come back as a failed result carrying
the AppError; they are never raised to the caller.
"""
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from config.settings import Settings, settings
from src.kb_common.enums import Market
from src.kb_common.errors import AppError
from src.kb_common.money import odds_to_display
from src.kb_match.domain.models import BALL_LABEL, Contact, FieldGeometry
from src.kb_match.engine.scheduler import AsyncioScheduler, Scheduler
from src.kb_match.engine.state_machine import MatchStateMachine
from src.kb_match.infrastructure.physics import BodyCommandBuffer
from src.kb_match.infrastructure.presentation import BufferedPresentation
from src.kb_session.application.schemas import (
    ConfirmResponse,
    ContactsRequest,
    ContactsResponse,
    HistoryResponse,
    MarketItem,
    MarketOption,
    MarketsResponse,
    SelectionChangeResponse,
    SessionResponse,
    SettlementResponse,
    VectorItem,
    WagerGroupItem,
)
from src.kb_wager.domain.ledger import WagerLedger
from src.kb_wager.domain.markets import MarketTable

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    ok: bool
    data: BaseModel | None = None
    error: AppError | None = None


def build_state_machine(
    cfg: Settings,
    scheduler: Scheduler,
    physics: BodyCommandBuffer,
    presentation: BufferedPresentation,
) -> MatchStateMachine:
    rng = random.Random(cfg.KICKOFF_SEED) if cfg.KICKOFF_SEED is not None else None
    markets = MarketTable(cfg.ODDS_OVERRIDES, total_line=cfg.TOTAL_GOALS_LINE)
    logger.info("Market table (line %s): %s", markets.total_line, markets.as_dict())
    return MatchStateMachine(
        ledger=WagerLedger(cfg.INITIAL_BALANCE),
        markets=markets,
        physics=physics,
        presentation=presentation,
        scheduler=scheduler,
        field=FieldGeometry(cfg.FIELD_WIDTH, cfg.FIELD_HEIGHT),
        match_duration_ms=cfg.MATCH_DURATION_MS,
        goal_dwell_ms=cfg.GOAL_DWELL_MS,
        tick_interval_ms=cfg.TICK_INTERVAL_MS,
        stake=cfg.FIXED_STAKE,
        rng=rng,
    )


class SessionService:
    def __init__(
        self,
        cfg: Settings | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.physics = BodyCommandBuffer()
        self.presentation = BufferedPresentation()
        self.machine = build_state_machine(
            cfg or settings,
            scheduler or AsyncioScheduler(),
            self.physics,
            self.presentation,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def select_wager(self, market: Market | str, outcome: str) -> CommandResult:
        return self._run(
            lambda: SelectionChangeResponse(
                change=self.machine.select_wager(market, outcome).value,
                session=self._session(),
            )
        )

    def clear_wagers(self) -> CommandResult:
        def _clear() -> SessionResponse:
            self.machine.clear_wagers()
            return self._session()

        return self._run(_clear)

    def confirm_wagers(self) -> CommandResult:
        def _confirm() -> ConfirmResponse:
            group = self.machine.confirm_wagers()
            return ConfirmResponse(
                group=WagerGroupItem.from_group(group, self.machine.markets),
                session=self._session(),
            )

        return self._run(_confirm)

    def reset(self) -> CommandResult:
        def _reset() -> SessionResponse:
            self.machine.reset()
            return self._session()

        return self._run(_reset)

    def report_contacts(self, body: ContactsRequest) -> CommandResult:
        contacts = [Contact(c.entity_a, c.entity_b) for c in body.contacts]
        return self._run(
            lambda: ContactsResponse(
                goals=self.machine.process_step(contacts),
                session=self._session(),
            )
        )

    def shutdown(self) -> None:
        self.machine.halt()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_session(self) -> SessionResponse:
        return self._session()

    def get_history(self) -> HistoryResponse:
        markets = self.machine.markets
        return HistoryResponse(
            items=[WagerGroupItem.from_group(g, markets) for g in self.machine.ledger.history]
        )

    def get_markets(self) -> MarketsResponse:
        markets = self.machine.markets
        items = []
        for market in Market:
            options = [
                MarketOption(
                    outcome=outcome,
                    name=markets.describe(market, outcome),
                    odds_x100=markets.odds_for(market, outcome),
                    odds_display=odds_to_display(markets.odds_for(market, outcome)),
                )
                for outcome in markets.outcomes(market)
            ]
            items.append(MarketItem(market=market.value, options=options))
        return MarketsResponse(
            total_line=markets.total_line, stake=self.machine.stake, markets=items
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, fn: Callable[[], BaseModel]) -> CommandResult:
        try:
            return CommandResult(ok=True, data=fn())
        except AppError as exc:
            logger.info("Command rejected: [%d] %s", exc.code, exc.message)
            return CommandResult(ok=False, error=exc)

    def _session(self) -> SessionResponse:
        extra: dict[str, Any] = {
            "announcement": self.presentation.last_goal_message,
            "command_sequence": self.physics.sequence,
        }
        position = self.physics.positions.get(BALL_LABEL)
        velocity = self.physics.velocities.get(BALL_LABEL)
        if position is not None:
            extra["ball_position"] = VectorItem(x=position.x, y=position.y)
        if velocity is not None:
            extra["ball_velocity"] = VectorItem(x=velocity.x, y=velocity.y)
        settlement = self.machine.last_settlement
        if settlement is not None:
            extra["settlement"] = SettlementResponse.from_summary(
                settlement, self.machine.markets
            )
        return SessionResponse.from_snapshot(
            self.machine.snapshot(), self.machine.markets, **extra
        )
