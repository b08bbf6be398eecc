"""Presentation adapter: logs every notification and keeps the transient goal banner."""
import logging

from src.kb_common.datetime_utils import format_clock
from src.kb_common.enums import MatchPhase
from src.kb_wager.domain.models import SettlementSummary

logger = logging.getLogger(__name__)


class BufferedPresentation:
    def __init__(self) -> None:
        self.last_goal_message: str | None = None

    def on_score_changed(self, home: int, away: int) -> None:
        logger.info("Score: home %d - %d away", home, away)

    def on_time_changed(self, minutes: int, seconds: int) -> None:
        logger.debug("Clock %s", format_clock(minutes, seconds))

    def on_phase_changed(self, phase: MatchPhase) -> None:
        logger.info("Phase -> %s", phase.value)
        if phase in (MatchPhase.IDLE, MatchPhase.RUNNING):
            # Goal announcements last only for the dwell.
            self.last_goal_message = None

    def on_goal(self, message: str) -> None:
        logger.info(message)
        self.last_goal_message = message

    def on_settlement(self, summary: SettlementSummary) -> None:
        logger.info(
            "Full time %d-%d (%s): %d group(s), stake=%d, payout=%d, balance=%d",
            summary.home,
            summary.away,
            summary.result_banner,
            len(summary.groups),
            summary.total_stake,
            summary.total_payout,
            summary.balance_after,
        )
