"""Local tile grid around the player."""

from __future__ import annotations

from combat_intel.core.enums import Material
from combat_intel.core.models import Position

_BLOCKING = frozenset({Material.WALL, Material.WATER, Material.LAVA})


class Grid:
    """Single-floor tile window backed by a flat list.

    Game coordinates are large, so the window is anchored at
    ``(origin_x, origin_y)`` on floor ``z``. Anything outside the window,
    or on another floor, reads as WALL.
    """

    __slots__ = ("width", "height", "origin_x", "origin_y", "z", "_tiles")

    def __init__(
        self,
        width: int,
        height: int,
        origin_x: int = 0,
        origin_y: int = 0,
        z: int = 7,
        default: Material = Material.FLOOR,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Grid dimensions must be positive")
        self.width = width
        self.height = height
        self.origin_x = origin_x
        self.origin_y = origin_y
        self.z = z
        self._tiles: list[Material] = [default] * (width * height)

    @classmethod
    def around(cls, center: Position, radius: int = 8) -> Grid:
        """Open floor window of ``2*radius+1`` tiles centred on *center*."""
        side = 2 * radius + 1
        return cls(side, side, center.x - radius, center.y - radius, center.z)

    # -- access --

    def _idx(self, pos: Position) -> int | None:
        if pos.z != self.z:
            return None
        lx = pos.x - self.origin_x
        ly = pos.y - self.origin_y
        if 0 <= lx < self.width and 0 <= ly < self.height:
            return ly * self.width + lx
        return None

    def get(self, pos: Position) -> Material:
        idx = self._idx(pos)
        if idx is None:
            return Material.WALL
        return self._tiles[idx]

    def set(self, pos: Position, material: Material) -> None:
        idx = self._idx(pos)
        if idx is not None:
            self._tiles[idx] = material

    def is_walkable(self, pos: Position) -> bool:
        return self.get(pos) not in _BLOCKING

