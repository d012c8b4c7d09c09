"""AreaTimingAnalyzer: should the area attack wait for a tighter stack?

Movement is detected by comparing each hostile's position against the
previous call. A hostile seen for the first time counts as stationary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from combat_intel.core.models import Position

if TYPE_CHECKING:
    from combat_intel.config import AreaTimingConfig
    from combat_intel.core.snapshot import SpatialQuery
    from combat_intel.systems.clock import Clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StackAnalysis:
    total: int = 0
    stationary: int = 0
    is_optimal: bool = False
    stack_ratio: float = 0.0


class AreaTimingAnalyzer:
    """Tracks hostile movement and runs the wait / don't-wait state machine."""

    __slots__ = (
        "config", "_world", "_clock",
        "_positions", "_moving", "_waiting", "_wait_started_at", "_last",
    )

    def __init__(self, config: AreaTimingConfig, world: SpatialQuery, clock: Clock) -> None:
        self.config = config
        self._world = world
        self._clock = clock
        self._positions: dict[int, Position] = {}
        self._moving: dict[int, bool] = {}
        self._waiting = False
        self._wait_started_at = 0
        self._last: StackAnalysis | None = None

    @property
    def last_analysis(self) -> StackAnalysis | None:
        return self._last

    @property
    def waiting(self) -> bool:
        return self._waiting

    def is_moving(self, entity_id: int) -> bool:
        return self._moving.get(entity_id, False)

    def _track_positions(self) -> None:
        positions: dict[int, Position] = {}
        moving: dict[int, bool] = {}
        for hostile in self._world.live_hostiles():
            prev = self._positions.get(hostile.id)
            positions[hostile.id] = hostile.position
            moving[hostile.id] = prev is not None and prev != hostile.position
        # Hostiles that vanished are forgotten.
        self._positions = positions
        self._moving = moving

    def analyze_stack(self) -> StackAnalysis | None:
        """Snapshot positions and measure the stack around the player."""
        if not self.config.enabled:
            self._last = None
            return None

        self._track_positions()
        origin = self._world.player().position
        radius = self.config.stack_radius
        total = 0
        stationary = 0
        for hostile in self._world.live_hostiles():
            if origin.chebyshev(hostile.position) > radius:
                continue
            total += 1
            if not self._moving.get(hostile.id, False):
                stationary += 1

        self._last = StackAnalysis(
            total=total,
            stationary=stationary,
            is_optimal=stationary >= self.config.min_stack_size,
            stack_ratio=stationary / total if total > 0 else 0.0,
        )
        return self._last

    def should_wait_for_stack(self, stack: StackAnalysis | None = None) -> bool:
        """Return True while it is worth holding the area attack.

        Pass the analysis already computed this tick to avoid taking a
        second position snapshot, which would mark every hostile stationary.
        """
        if not self.config.enabled:
            return False
        if stack is None:
            stack = self.analyze_stack()
        if stack is None:
            return False

        if stack.is_optimal:
            self._stop_waiting("stack optimal")
            return False
        if stack.total < self.config.min_stack_size:
            self._stop_waiting("too few hostiles")
            return False

        now = self._clock()
        if not self._waiting:
            self._waiting = True
            self._wait_started_at = now
            logger.debug("Waiting for stack (%d/%d stationary)", stack.stationary, stack.total)

        if now - self._wait_started_at > self.config.max_wait_ms:
            self._stop_waiting("max wait exceeded")
            return False

        return stack.stack_ratio < self.config.moving_ratio_threshold

    def _stop_waiting(self, why: str) -> None:
        if self._waiting:
            logger.debug("Stopped waiting for stack: %s", why)
        self._waiting = False

    def is_optimal_cast_time(self) -> bool:
        stack = self.analyze_stack()
        if stack is None:
            return False
        return stack.is_optimal or (stack.total >= 2 and stack.stack_ratio >= 0.7)
