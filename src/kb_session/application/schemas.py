"""Pydantic schemas for the kb_session API."""

from pydantic import BaseModel, Field

from src.kb_common.enums import Market
from src.kb_common.money import amount_to_display, calculate_payout, odds_to_display
from src.kb_match.engine.state_machine import MatchSnapshot
from src.kb_wager.domain.markets import MarketTable
from src.kb_wager.domain.models import (
    SettlementSummary,
    WagerGroup,
    WagerResult,
    WagerSelection,
)

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SelectWagerRequest(BaseModel):
    market: Market
    outcome: str = Field(..., min_length=1, max_length=16)


class ContactItem(BaseModel):
    entity_a: str = Field(..., min_length=1)
    entity_b: str = Field(..., min_length=1)


class ContactsRequest(BaseModel):
    contacts: list[ContactItem] = Field(default_factory=list, max_length=64)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class VectorItem(BaseModel):
    x: float
    y: float


class SelectionItem(BaseModel):
    market: str
    outcome: str
    name: str
    odds_x100: int
    odds_display: str
    stake: int
    potential_win: int

    @classmethod
    def from_selection(cls, sel: WagerSelection, markets: MarketTable) -> "SelectionItem":
        return cls(
            market=sel.market.value,
            outcome=sel.outcome,
            name=markets.describe(sel.market, sel.outcome),
            odds_x100=sel.odds_x100,
            odds_display=odds_to_display(sel.odds_x100),
            stake=sel.stake,
            potential_win=calculate_payout(sel.stake, sel.odds_x100),
        )


class ResultItem(BaseModel):
    market: str
    outcome: str
    is_win: bool
    payout: int

    @classmethod
    def from_result(cls, r: WagerResult) -> "ResultItem":
        return cls(
            market=r.selection.market.value,
            outcome=r.selection.outcome,
            is_win=r.is_win,
            payout=r.payout,
        )


class WagerGroupItem(BaseModel):
    id: str
    created_at: str  # ISO8601 string
    status: str
    selections: list[SelectionItem]
    stake_total: int
    stake_total_display: str
    results: list[ResultItem] | None
    payout_total: int
    settled_at: str | None

    @classmethod
    def from_group(cls, g: WagerGroup, markets: MarketTable) -> "WagerGroupItem":
        return cls(
            id=g.id,
            created_at=g.created_at.isoformat(),
            status=g.status.value,
            selections=[SelectionItem.from_selection(s, markets) for s in g.selections],
            stake_total=g.stake_total,
            stake_total_display=amount_to_display(g.stake_total),
            results=(
                [ResultItem.from_result(r) for r in g.results] if g.results is not None else None
            ),
            payout_total=g.payout_total,
            settled_at=g.settled_at.isoformat() if g.settled_at else None,
        )


class SettlementResponse(BaseModel):
    home: int
    away: int
    result_banner: str
    total_stake: int
    total_payout: int
    balance_after: int
    groups: list[WagerGroupItem]

    @classmethod
    def from_summary(
        cls, summary: SettlementSummary, markets: MarketTable
    ) -> "SettlementResponse":
        return cls(
            home=summary.home,
            away=summary.away,
            result_banner=summary.result_banner,
            total_stake=summary.total_stake,
            total_payout=summary.total_payout,
            balance_after=summary.balance_after,
            groups=[WagerGroupItem.from_group(g, markets) for g in summary.groups],
        )


class SessionResponse(BaseModel):
    phase: str
    bets_open: bool
    home: int
    away: int
    time_display: str
    game_minute: int
    balance: int
    balance_display: str
    pending: list[SelectionItem]
    pending_stake_total: int
    pending_potential_win: int
    epoch: int
    announcement: str | None = None
    ball_position: VectorItem | None = None
    ball_velocity: VectorItem | None = None
    command_sequence: int = 0
    settlement: SettlementResponse | None = None

    @classmethod
    def from_snapshot(
        cls, snap: MatchSnapshot, markets: MarketTable, **extra: object
    ) -> "SessionResponse":
        pending = [SelectionItem.from_selection(s, markets) for s in snap.pending]
        return cls(
            phase=snap.phase.value,
            bets_open=snap.bets_open,
            home=snap.home,
            away=snap.away,
            time_display=snap.remaining.display(),
            game_minute=snap.game_minute,
            balance=snap.balance,
            balance_display=amount_to_display(snap.balance),
            pending=pending,
            pending_stake_total=sum(p.stake for p in pending),
            pending_potential_win=snap.potential_payout,
            epoch=snap.epoch,
            **extra,
        )


class SelectionChangeResponse(BaseModel):
    change: str
    session: SessionResponse


class ConfirmResponse(BaseModel):
    group: WagerGroupItem
    session: SessionResponse


class ContactsResponse(BaseModel):
    goals: int
    session: SessionResponse


class HistoryResponse(BaseModel):
    items: list[WagerGroupItem]


class MarketOption(BaseModel):
    outcome: str
    name: str
    odds_x100: int
    odds_display: str


class MarketItem(BaseModel):
    market: str
    options: list[MarketOption]


class MarketsResponse(BaseModel):
    total_line: float
    stake: int
    markets: list[MarketItem]
