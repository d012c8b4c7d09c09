"""WaveOptimizer: best origin, facing and footprint for an area spell.

The current tile is always evaluated. Neighbouring tiles are only scanned
when the reposition cooldown has elapsed, and a neighbour must beat the
current best by more than one hit before moving is suggested.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from combat_intel.core.enums import Direction, WaveShape
from combat_intel.core.geometry import wave_tiles
from combat_intel.core.models import Position

if TYPE_CHECKING:
    from combat_intel.config import WaveConfig
    from combat_intel.core.snapshot import SpatialQuery
    from combat_intel.systems.clock import Clock

logger = logging.getLogger(__name__)

# Evaluation order doubles as the tie-break: the first combination found
# with a given count wins.
_DIRECTIONS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)
_SHAPES = (WaveShape.SMALL, WaveShape.LARGE)


@dataclass(frozen=True, slots=True)
class WaveResult:
    """Where to stand and which way to face for the best wave."""

    position: Position
    direction: Direction
    monster_count: int
    needs_reposition: bool = False
    shape: WaveShape = WaveShape.SMALL


class WaveOptimizer:
    """Searches cast positions and directions for the most simultaneous hits."""

    __slots__ = ("config", "_world", "_clock", "_last_reposition_at", "_last_result")

    def __init__(self, config: WaveConfig, world: SpatialQuery, clock: Clock) -> None:
        self.config = config
        self._world = world
        self._clock = clock
        self._last_reposition_at: int | None = None
        self._last_result: WaveResult | None = None

    @property
    def last_result(self) -> WaveResult | None:
        return self._last_result

    def count_in_wave(self, origin: Position, direction: Direction, shape: WaveShape) -> int:
        return self._world.count_hostiles(wave_tiles(shape, origin, direction))

    def _reposition_ready(self, now: int) -> bool:
        if self._last_reposition_at is None:
            return True
        return now - self._last_reposition_at > self.config.reposition_cooldown_ms

    def find_optimal_cast(self) -> WaveResult | None:
        """Return the best wave opportunity, or None below ``min_monsters``."""
        if not self.config.enabled:
            self._last_result = None
            return None

        now = self._clock()
        origin = self._world.player().position
        best_count = 0
        best: WaveResult | None = None

        for direction in _DIRECTIONS:
            for shape in _SHAPES:
                count = self.count_in_wave(origin, direction, shape)
                if count > best_count:
                    best_count = count
                    best = WaveResult(origin, direction, count, False, shape)

        if self._reposition_ready(now):
            r = self.config.reposition_radius
            for dx in range(-r, r + 1):
                for dy in range(-r, r + 1):
                    if dx == 0 and dy == 0:
                        continue
                    candidate = origin.offset(dx, dy)
                    if not self._world.is_walkable(candidate):
                        continue
                    for direction in _DIRECTIONS:
                        count = self.count_in_wave(candidate, direction, WaveShape.LARGE)
                        # Moving has to pay for itself: +2 hits at least.
                        if count > best_count + 1:
                            best_count = count
                            best = WaveResult(candidate, direction, count, True, WaveShape.LARGE)

            if best is not None and best.needs_reposition:
                self._last_reposition_at = now
                logger.debug(
                    "Reposition to %s facing %s for %d targets",
                    best.position, best.direction.name, best.monster_count,
                )

        if best is None or best.monster_count < self.config.min_monsters:
            self._last_result = None
        else:
            self._last_result = best
        return self._last_result

    def efficiency(self) -> float:
        """Fraction of the optimal hit count reached by the last result."""
        if self._last_result is None:
            return 0.0
        return min(1.0, self._last_result.monster_count / self.config.optimal_monsters)

    def should_reposition(self) -> bool:
        """Recompute, and report whether moving is clearly worth it."""
        result = self.find_optimal_cast()
        return (
            result is not None
            and result.needs_reposition
            and result.monster_count >= self.config.min_monsters + 2
        )
