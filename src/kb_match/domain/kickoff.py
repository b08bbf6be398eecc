"""Kickoff velocity sampling over a fixed table.

Every entry has a non-zero horizontal and vertical component so the ball
never travels a degenerate straight line between the goals.
"""

import random

from src.kb_match.domain.models import Vector

KICKOFF_VELOCITIES: tuple[Vector, ...] = (
    Vector(4.0, 8.0),    # towards lower goal
    Vector(-4.0, 8.0),   # towards lower goal
    Vector(4.0, -8.0),   # towards upper goal
    Vector(-4.0, -8.0),  # towards upper goal
)


def validate_velocity_table(table: tuple[Vector, ...]) -> None:
    if not table:
        raise ValueError("Kickoff velocity table is empty")
    for v in table:
        if v.x == 0 or v.y == 0:
            raise ValueError(f"Kickoff velocity needs both components non-zero, got {v}")


def draw_kickoff_velocity(
    rng: random.Random,
    table: tuple[Vector, ...] = KICKOFF_VELOCITIES,
) -> Vector:
    """Uniform draw from `table`; pass a seeded Random for reproducible tests."""
    return rng.choice(table)


validate_velocity_table(KICKOFF_VELOCITIES)
