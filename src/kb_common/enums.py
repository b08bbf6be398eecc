"""Global enums — values double as wire strings in the HTTP API."""

from enum import Enum


class MatchPhase(str, Enum):
    IDLE = "IDLE"
    AWAITING_KICKOFF = "AWAITING_KICKOFF"
    RUNNING = "RUNNING"
    PAUSED_FOR_GOAL = "PAUSED_FOR_GOAL"
    ENDED = "ENDED"


class Market(str, Enum):
    """Wager category."""
    RESULT = "result"
    TOTAL = "total"
    PARITY = "parity"


class MatchResult(str, Enum):
    HOME = "home"
    DRAW = "draw"
    AWAY = "away"


class TotalCategory(str, Enum):
    OVER = "over"
    UNDER = "under"


class Parity(str, Enum):
    ODD = "odd"
    EVEN = "even"


class WagerGroupStatus(str, Enum):
    PENDING = "PENDING"
    SETTLED = "SETTLED"


class SelectionChange(str, Enum):
    """What a select() call did to the pending set."""
    ADDED = "ADDED"
    REPLACED = "REPLACED"
    REMOVED = "REMOVED"


class GoalSide(str, Enum):
    """Goal sensor tag as labelled in the physics world."""
    UPPER = "upperGoal"
    LOWER = "lowerGoal"
