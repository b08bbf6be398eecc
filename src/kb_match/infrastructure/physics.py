"""In-process physics adapter.

The simulation runs client-side; this buffer keeps the most recent command
per body so the client can pick it up from the session snapshot.
"""

from src.kb_match.domain.models import Vector


class BodyCommandBuffer:
    def __init__(self) -> None:
        self.positions: dict[str, Vector] = {}
        self.velocities: dict[str, Vector] = {}
        self.sequence = 0   # bumped on every command so clients can detect changes

    def set_velocity(self, body: str, velocity: Vector) -> None:
        self.velocities[body] = velocity
        self.sequence += 1

    def set_position(self, body: str, position: Vector) -> None:
        self.positions[body] = position
        self.sequence += 1
