"""Goal reaction pipeline — turns physics contacts into score changes.

Only a ball/goal-sensor pair counts, and only while the match is RUNNING.
The upper goal is attacked by the home side, the lower by the away side.
"""
import logging

from src.kb_common.enums import GoalSide, MatchPhase
from src.kb_match.domain.models import BALL_LABEL, Contact, Score

logger = logging.getLogger(__name__)

_SENSOR_LABELS = {side.value: side for side in GoalSide}

GOAL_MESSAGES = {
    GoalSide.UPPER: "Home Team Goal!",
    GoalSide.LOWER: "Away Team Goal!",
}


class GoalReactionPipeline:
    def __init__(self, ball_label: str = BALL_LABEL) -> None:
        self.ball_label = ball_label

    def detect(self, contact: Contact) -> GoalSide | None:
        """Return the sensor hit if this contact is ball vs goal sensor."""
        a, b = contact.entity_a, contact.entity_b
        if a == self.ball_label:
            return _SENSOR_LABELS.get(b)
        if b == self.ball_label:
            return _SENSOR_LABELS.get(a)
        return None

    def apply(self, contact: Contact, phase: MatchPhase, score: Score) -> GoalSide | None:
        """Score the contact if it is a goal and the phase allows it."""
        side = self.detect(contact)
        if side is None:
            return None
        if phase != MatchPhase.RUNNING:
            logger.debug("Goal contact on %s ignored in phase %s", side.value, phase.value)
            return None
        if side == GoalSide.UPPER:
            score.home += 1
        else:
            score.away += 1
        logger.info(
            "Goal in %s: home %d - %d away", side.value, score.home, score.away
        )
        return side
