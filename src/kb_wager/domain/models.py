"""Domain models for kb_wager — pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from datetime import datetime

from src.kb_common.enums import Market, WagerGroupStatus


@dataclass(frozen=True)
class WagerSelection:
    market: Market
    outcome: str     # MatchResult / TotalCategory / Parity value
    odds_x100: int   # decimal odds * 100
    stake: int       # whole currency units


@dataclass(frozen=True)
class WagerResult:
    selection: WagerSelection
    is_win: bool
    payout: int      # gross return, 0 on a loss


@dataclass
class WagerGroup:
    """One confirmed bundle of selections, staked atomically."""

    id: str
    created_at: datetime
    selections: list[WagerSelection]
    status: WagerGroupStatus = WagerGroupStatus.PENDING
    results: list[WagerResult] | None = None
    settled_at: datetime | None = None

    @property
    def stake_total(self) -> int:
        return sum(s.stake for s in self.selections)

    @property
    def payout_total(self) -> int:
        if self.results is None:
            return 0
        return sum(r.payout for r in self.results)

    @property
    def is_pending(self) -> bool:
        return self.status == WagerGroupStatus.PENDING


@dataclass
class SettlementSummary:
    """Result of settling one finished match."""

    home: int
    away: int
    result_banner: str
    groups: list[WagerGroup] = field(default_factory=list)
    balance_after: int = 0

    @property
    def total_stake(self) -> int:
        return sum(g.stake_total for g in self.groups)

    @property
    def total_payout(self) -> int:
        return sum(g.payout_total for g in self.groups)
