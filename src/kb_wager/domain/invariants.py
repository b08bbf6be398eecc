"""Ledger invariant verification after each balance-changing operation."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.kb_wager.domain.ledger import WagerLedger

logger = logging.getLogger(__name__)


def verify_ledger_invariants(ledger: "WagerLedger") -> None:
    """Verify money conservation. Raises AssertionError if violated.

    INV-1: balance >= 0
    INV-2: balance == initial - sum(stakes) + sum(payouts)
    INV-3: every settled group has one result per selection
    """
    balance = ledger.balance
    assert balance >= 0, f"INV-1 violated: balance={balance} < 0"

    groups = ledger.history
    stakes = sum(g.stake_total for g in groups)
    payouts = sum(g.payout_total for g in groups)
    expected = ledger.initial_balance - stakes + payouts
    assert balance == expected, (
        f"INV-2 violated: balance={balance} != initial({ledger.initial_balance})"
        f" - stakes({stakes}) + payouts({payouts}) = {expected}"
    )

    for g in groups:
        if not g.is_pending:
            assert g.results is not None and len(g.results) == len(g.selections), (
                f"INV-3 violated: group {g.id} has incomplete results"
            )

    logger.debug(
        "Ledger invariants OK: balance=%d, stakes=%d, payouts=%d", balance, stakes, payouts
    )
