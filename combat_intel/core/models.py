"""Core data models: Position, HostileSnapshot, PlayerState."""

from __future__ import annotations

from dataclasses import dataclass

from combat_intel.core.enums import Direction


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable tile coordinate; ``z`` is the floor index."""

    x: int = 0
    y: int = 0
    z: int = 7

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.x + dx, self.y + dy, self.z)

    def chebyshev(self, other: Position) -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def same_floor(self, other: Position) -> bool:
        return self.z == other.z

    def __repr__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


# Unit step for each facing direction
DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


def is_behind(origin: Position, facing: Direction, other: Position) -> bool:
    """Return True if *other* lies on the facing axis, opposite the facing.

    Only the exact axis counts: a hostile one tile off the axis is treated
    as beside the player, not behind.
    """
    fx, fy = DIRECTION_OFFSETS[facing]
    rx = other.x - origin.x
    ry = other.y - origin.y
    # Perpendicular component must be zero, forward component negative.
    if rx * fy - ry * fx != 0:
        return False
    return rx * fx + ry * fy < 0


@dataclass(frozen=True, slots=True)
class HostileSnapshot:
    """One visible hostile as captured for a single decision cycle."""

    id: int
    name: str
    position: Position
    health_percent: int = 100
    alive: bool = True

    @property
    def is_alive(self) -> bool:
        return self.alive and self.health_percent > 0


@dataclass(frozen=True, slots=True)
class PlayerState:
    """Player-side inputs: where we stand, where we face, what we can afford."""

    position: Position
    direction: Direction = Direction.NORTH
    mana_percent: int = 100
    vocation_id: int = 0
