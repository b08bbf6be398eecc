"""Collaborator Protocols — interface contracts for physics and presentation."""
from typing import Protocol

from src.kb_common.enums import MatchPhase
from src.kb_match.domain.models import Vector
from src.kb_wager.domain.models import SettlementSummary


class PhysicsPort(Protocol):
    """Fire-and-forget commands to the rigid-body simulation."""

    def set_velocity(self, body: str, velocity: Vector) -> None: ...

    def set_position(self, body: str, position: Vector) -> None: ...


class PresentationPort(Protocol):
    """Observational notifications; nothing flows back into the core."""

    def on_score_changed(self, home: int, away: int) -> None: ...

    def on_time_changed(self, minutes: int, seconds: int) -> None: ...

    def on_phase_changed(self, phase: MatchPhase) -> None: ...

    def on_goal(self, message: str) -> None: ...

    def on_settlement(self, summary: SettlementSummary) -> None: ...
