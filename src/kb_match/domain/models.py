"""Match domain models — pure dataclasses, no business logic."""

from dataclasses import dataclass

BALL_LABEL = "ball"


@dataclass(frozen=True)
class Vector:
    x: float
    y: float


@dataclass
class Score:
    home: int = 0
    away: int = 0

    def reset(self) -> None:
        self.home = 0
        self.away = 0


@dataclass(frozen=True)
class Contact:
    """A collision-start pair reported by the physics collaborator."""

    entity_a: str   # body label
    entity_b: str


@dataclass(frozen=True)
class FieldGeometry:
    width: float
    height: float

    @property
    def center(self) -> Vector:
        return Vector(self.width / 2, self.height / 2)
