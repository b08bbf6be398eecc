"""Unit tests for WagerLedger."""

from datetime import UTC, datetime

import pytest

from src.kb_common.enums import Market, SelectionChange, WagerGroupStatus
from src.kb_common.errors import AppError
from src.kb_wager.domain.invariants import verify_ledger_invariants
from src.kb_wager.domain.ledger import WagerLedger
from src.kb_wager.domain.outcome import evaluate

_FIXED_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _make_ledger(balance: int = 10_000) -> WagerLedger:
    return WagerLedger(balance, clock=lambda: _FIXED_TIME)


class TestSelect:
    def test_add(self) -> None:
        ledger = _make_ledger()
        change = ledger.select(Market.RESULT, "home", 180, 100)
        assert change == SelectionChange.ADDED
        assert len(ledger.pending) == 1
        assert ledger.balance == 10_000

    def test_reselect_same_outcome_clears(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.PARITY, "odd", 190, 100)
        change = ledger.select(Market.PARITY, "odd", 190, 100)
        assert change == SelectionChange.REMOVED
        assert ledger.pending == []

    def test_other_outcome_replaces(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.PARITY, "odd", 190, 100)
        change = ledger.select(Market.PARITY, "even", 190, 100)
        assert change == SelectionChange.REPLACED
        parity = [s for s in ledger.pending if s.market == Market.PARITY]
        assert len(parity) == 1
        assert parity[0].outcome == "even"

    def test_one_per_market_across_markets(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "draw", 320, 100)
        ledger.select(Market.TOTAL, "over", 190, 100)
        ledger.select(Market.PARITY, "even", 190, 100)
        ledger.select(Market.RESULT, "away", 210, 100)
        assert [(s.market, s.outcome) for s in ledger.pending] == [
            (Market.RESULT, "away"),
            (Market.TOTAL, "over"),
            (Market.PARITY, "even"),
        ]
        assert ledger.pending_stake_total == 300

    def test_potential_payout(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "draw", 320, 100)
        ledger.select(Market.TOTAL, "under", 185, 3)
        # 3 * 1.85 = 5.55 rounds half up to 6
        assert ledger.potential_payout == 320 + 6

    def test_clear_pending(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        ledger.clear_pending()
        assert ledger.pending == []

    def test_invalid_stake_rejected(self) -> None:
        with pytest.raises(ValueError):
            _make_ledger().select(Market.RESULT, "home", 180, 0)


class TestConfirm:
    def test_debits_and_records_group(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        group = ledger.confirm()
        assert ledger.balance == 9_900
        assert group.status == WagerGroupStatus.PENDING
        assert group.created_at == _FIXED_TIME
        assert group.stake_total == 100
        assert ledger.history == [group]
        assert ledger.pending == []

    def test_empty_pending_rejected(self) -> None:
        ledger = _make_ledger()
        with pytest.raises(AppError) as exc_info:
            ledger.confirm()
        assert exc_info.value.code == 1001
        assert ledger.history == []

    def test_over_stake_leaves_state_unchanged(self) -> None:
        ledger = _make_ledger(balance=250)
        ledger.select(Market.RESULT, "home", 180, 100)
        ledger.select(Market.TOTAL, "over", 190, 100)
        ledger.select(Market.PARITY, "odd", 190, 100)
        pending_before = ledger.pending
        with pytest.raises(AppError) as exc_info:
            ledger.confirm()
        assert exc_info.value.code == 1002
        assert ledger.balance == 250
        assert ledger.pending == pending_before
        assert ledger.history == []

    def test_exact_balance_allowed(self) -> None:
        ledger = _make_ledger(balance=200)
        ledger.select(Market.RESULT, "home", 180, 100)
        ledger.select(Market.TOTAL, "over", 190, 100)
        ledger.confirm()
        assert ledger.balance == 0

    def test_group_snapshot_not_aliased_to_pending(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        group = ledger.confirm()
        ledger.select(Market.RESULT, "away", 210, 100)
        assert [s.outcome for s in group.selections] == ["home"]


class TestSettle:
    def test_home_win_scenario(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        ledger.confirm()
        assert ledger.balance == 9_900

        settled = ledger.settle(evaluate(3, 1))

        assert len(settled) == 1
        result = settled[0].results[0]  # type: ignore[index]
        assert result.is_win is True
        assert result.payout == 180
        assert ledger.balance == 10_080
        assert settled[0].status == WagerGroupStatus.SETTLED
        assert settled[0].settled_at == _FIXED_TIME

    def test_mixed_selections(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "draw", 320, 100)
        ledger.select(Market.TOTAL, "under", 180, 100)
        ledger.select(Market.PARITY, "odd", 190, 100)
        ledger.confirm()
        # 2-2: draw wins, under wins, odd loses
        group = ledger.settle(evaluate(2, 2))[0]
        assert [r.is_win for r in group.results] == [True, True, False]  # type: ignore[union-attr]
        assert group.payout_total == 320 + 180
        assert ledger.balance == 10_000 - 300 + 500

    def test_settle_is_idempotent(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        ledger.confirm()
        ledger.settle(evaluate(1, 0))
        balance = ledger.balance
        assert ledger.settle(evaluate(1, 0)) == []
        assert ledger.balance == balance

    def test_settles_all_outstanding_groups(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "away", 210, 100)
        ledger.confirm()
        ledger.select(Market.PARITY, "odd", 190, 100)
        ledger.confirm()
        settled = ledger.settle(evaluate(0, 1))
        assert len(settled) == 2
        assert ledger.outstanding_groups == []
        assert ledger.balance == 10_000 - 200 + 210 + 190

    def test_loss_pays_nothing(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        ledger.confirm()
        group = ledger.settle(evaluate(0, 0))[0]
        assert group.results[0].payout == 0  # type: ignore[index]
        assert ledger.balance == 9_900

    def test_double_settle_of_one_group_is_a_defect(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        group = ledger.confirm()
        ledger.settle(evaluate(1, 0))
        with pytest.raises(AssertionError, match="settled twice"):
            ledger._settle_group(group, evaluate(1, 0))


class TestInvariants:
    def test_tampered_balance_detected(self) -> None:
        ledger = _make_ledger()
        ledger.select(Market.RESULT, "home", 180, 100)
        ledger.confirm()
        ledger.balance += 1
        with pytest.raises(AssertionError, match="INV-2"):
            verify_ledger_invariants(ledger)

    def test_negative_initial_balance_rejected(self) -> None:
        with pytest.raises(ValueError):
            WagerLedger(-1)
