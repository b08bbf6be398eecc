"""WagerLedger — balance, pending selections and confirmed wager history.

The ledger is purely in-memory and lives as long as the process. Every
operation either completes or raises before touching state.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from src.kb_common.datetime_utils import utc_now
from src.kb_common.enums import Market, SelectionChange, WagerGroupStatus
from src.kb_common.errors import InsufficientBalanceError, NoSelectionsError
from src.kb_common.money import calculate_payout, validate_odds, validate_stake
from src.kb_wager.domain.invariants import verify_ledger_invariants
from src.kb_wager.domain.models import WagerGroup, WagerResult, WagerSelection
from src.kb_wager.domain.outcome import MatchOutcome

logger = logging.getLogger(__name__)


def _new_group_id() -> str:
    return f"wg_{uuid.uuid4().hex[:12]}"


class WagerLedger:
    def __init__(
        self,
        initial_balance: int,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if initial_balance < 0:
            raise ValueError(f"initial_balance must be >= 0, got {initial_balance}")
        self.initial_balance = initial_balance
        self.balance = initial_balance
        self._clock = clock
        # Insertion-ordered; at most one selection per market.
        self._pending: dict[Market, WagerSelection] = {}
        self._history: list[WagerGroup] = []

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    @property
    def pending(self) -> list[WagerSelection]:
        return list(self._pending.values())

    @property
    def history(self) -> list[WagerGroup]:
        return list(self._history)

    @property
    def pending_stake_total(self) -> int:
        return sum(s.stake for s in self._pending.values())

    @property
    def potential_payout(self) -> int:
        """What the pending selections would return if every one of them won."""
        return sum(calculate_payout(s.stake, s.odds_x100) for s in self._pending.values())

    @property
    def outstanding_groups(self) -> list[WagerGroup]:
        return [g for g in self._history if g.is_pending]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def select(
        self, market: Market, outcome: str, odds_x100: int, stake: int
    ) -> SelectionChange:
        """Toggle a selection: add, replace the market's current one, or remove it."""
        validate_odds(odds_x100)
        validate_stake(stake)
        current = self._pending.get(market)
        if current is not None and current.outcome == outcome:
            del self._pending[market]
            logger.debug("Selection removed: %s/%s", market.value, outcome)
            return SelectionChange.REMOVED

        self._pending[market] = WagerSelection(
            market=market, outcome=outcome, odds_x100=odds_x100, stake=stake
        )
        change = SelectionChange.ADDED if current is None else SelectionChange.REPLACED
        logger.debug("Selection %s: %s/%s", change.value.lower(), market.value, outcome)
        return change

    def clear_pending(self) -> None:
        self._pending.clear()

    def confirm(self) -> WagerGroup:
        """Debit the pending stake total and snapshot it into a PENDING group."""
        if not self._pending:
            raise NoSelectionsError()
        total = self.pending_stake_total
        if total > self.balance:
            raise InsufficientBalanceError(required=total, available=self.balance)

        group = WagerGroup(
            id=_new_group_id(),
            created_at=self._clock(),
            selections=list(self._pending.values()),
        )
        self.balance -= total
        self._history.append(group)
        self._pending.clear()
        logger.info(
            "Wager group %s confirmed: %d selection(s), stake=%d, balance=%d",
            group.id, len(group.selections), total, self.balance,
        )
        verify_ledger_invariants(self)
        return group

    def settle(self, outcome: MatchOutcome) -> list[WagerGroup]:
        """Settle every outstanding group in one pass. Returns the groups settled now."""
        settled: list[WagerGroup] = []
        for group in self.outstanding_groups:
            self._settle_group(group, outcome)
            settled.append(group)
        if settled:
            verify_ledger_invariants(self)
        return settled

    def _settle_group(self, group: WagerGroup, outcome: MatchOutcome) -> None:
        assert group.status == WagerGroupStatus.PENDING, (
            f"Wager group {group.id} settled twice"
        )
        results = []
        for sel in group.selections:
            is_win = outcome.winning_outcome(sel.market) == sel.outcome
            payout = calculate_payout(sel.stake, sel.odds_x100) if is_win else 0
            results.append(WagerResult(selection=sel, is_win=is_win, payout=payout))

        payout_total = sum(r.payout for r in results)
        self.balance += payout_total
        group.results = results
        group.status = WagerGroupStatus.SETTLED
        group.settled_at = self._clock()
        logger.info(
            "Wager group %s settled: stake=%d, payout=%d, balance=%d",
            group.id, group.stake_total, payout_total, self.balance,
        )
