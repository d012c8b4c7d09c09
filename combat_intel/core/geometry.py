"""Footprints and area patterns.

A footprint is the list of tiles an area spell covers from an origin and a
facing. Wave footprints widen with distance: at step ``d`` the perpendicular
spread is ``min(d, cap)``, giving a wedge rather than a rectangle.
"""

from __future__ import annotations

from dataclasses import dataclass

from combat_intel.core.enums import Direction, WaveShape
from combat_intel.core.models import DIRECTION_OFFSETS, Position


@dataclass(frozen=True, slots=True)
class WavePattern:
    """Reach and spread cap of a wave footprint."""

    range: int
    spread_cap: int

    @property
    def width(self) -> int:
        return 2 * self.spread_cap + 1

    def tiles(self, origin: Position, direction: Direction) -> list[Position]:
        dx, dy = DIRECTION_OFFSETS[direction]
        out: list[Position] = []
        for distance in range(1, self.range + 1):
            spread = min(distance, self.spread_cap)
            for offset in range(-spread, spread + 1):
                # Offset runs along the axis perpendicular to the facing.
                out.append(Position(
                    origin.x + dx * distance + (offset if dy != 0 else 0),
                    origin.y + dy * distance + (offset if dx != 0 else 0),
                    origin.z,
                ))
        return out

    def tile_count(self) -> int:
        return sum(2 * min(d, self.spread_cap) + 1 for d in range(1, self.range + 1))


WAVE_PATTERNS: dict[WaveShape, WavePattern] = {
    WaveShape.SMALL: WavePattern(range=3, spread_cap=2),
    WaveShape.LARGE: WavePattern(range=5, spread_cap=3),
}


def wave_tiles(shape: WaveShape, origin: Position, direction: Direction) -> list[Position]:
    return WAVE_PATTERNS[shape].tiles(origin, direction)


def parse_area_pattern(pattern: str) -> tuple[tuple[int, int], ...]:
    """Turn an ASCII mask into (dx, dy) offsets relative to its centre.

    ``1`` marks a covered tile; any other character is empty. Rows must be
    of equal odd length and the row count must be odd.
    """
    rows = [line.strip() for line in pattern.strip().splitlines() if line.strip()]
    if not rows or len(rows) % 2 == 0:
        raise ValueError("Area pattern needs an odd number of rows")
    width = len(rows[0])
    if width % 2 == 0 or any(len(r) != width for r in rows):
        raise ValueError("Area pattern rows must share one odd width")
    cy = len(rows) // 2
    cx = width // 2
    return tuple(
        (x - cx, y - cy)
        for y, row in enumerate(rows)
        for x, ch in enumerate(row)
        if ch == "1"
    )


def area_tiles(center: Position, offsets: tuple[tuple[int, int], ...]) -> list[Position]:
    return [center.offset(dx, dy) for dx, dy in offsets]


# 5x5 diamond around the player, centre excluded
BURST_AREA = parse_area_pattern("""
    00100
    01110
    11011
    01110
    00100
""")
