"""KillPriorityRanker: which hostile to kill first.

Low health, danger and loot value raise priority; distance lowers it.
Wounded hostiles that are drifting out of melee get an extra push so they
do not escape. Recomputation is rate limited; between updates the cached
list is returned unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from combat_intel.analyzers.tables import DEFAULT_DANGER, danger_rating, loot_value
from combat_intel.core.models import HostileSnapshot, Position

if TYPE_CHECKING:
    from combat_intel.config import KillPriorityConfig
    from combat_intel.core.snapshot import SpatialQuery
    from combat_intel.systems.clock import Clock

_ESCAPE_MIN_DISTANCE = 3
_ESCAPE_MAX_HP = 30


@dataclass(frozen=True, slots=True)
class PriorityEntry:
    hostile: HostileSnapshot
    name: str
    health: int
    score: float
    position: Position


def low_hp_multiplier(hp: int) -> float:
    if hp <= 15:
        return 2.0
    if hp <= 25:
        return 1.5
    if hp <= 40:
        return 1.0
    return 0.0


class KillPriorityRanker:
    """Ranks live hostiles by kill urgency."""

    __slots__ = ("config", "_world", "_clock", "_entries", "_last_update_at")

    def __init__(self, config: KillPriorityConfig, world: SpatialQuery, clock: Clock) -> None:
        self.config = config
        self._world = world
        self._clock = clock
        self._entries: list[PriorityEntry] = []
        self._last_update_at: int | None = None

    @property
    def entries(self) -> list[PriorityEntry]:
        """Cached list from the last recomputation."""
        return list(self._entries)

    def score(self, hostile: HostileSnapshot, origin: Position) -> float:
        cfg = self.config
        hp = hostile.health_percent
        distance = origin.chebyshev(hostile.position)

        priority = cfg.low_hp_bonus * low_hp_multiplier(hp)
        priority += danger_rating(hostile.name) / DEFAULT_DANGER * cfg.danger_bonus
        priority += loot_value(hostile.name) * cfg.loot_value_weight
        priority -= distance * cfg.distance_penalty
        if hp <= _ESCAPE_MAX_HP and _ESCAPE_MIN_DISTANCE < distance <= cfg.escape_radius:
            priority += cfg.escape_bonus
        return max(0.0, priority)

    def update(self) -> list[PriorityEntry]:
        """Return the ranked list, recomputing at most once per interval."""
        if not self.config.enabled:
            self._entries = []
            return []

        now = self._clock()
        if (
            self._last_update_at is not None
            and now - self._last_update_at < self.config.update_interval_ms
        ):
            return list(self._entries)

        origin = self._world.player().position
        entries = [
            PriorityEntry(h, h.name, h.health_percent, self.score(h, origin), h.position)
            for h in self._world.live_hostiles()
        ]
        # list.sort is stable: equal scores keep scan order.
        entries.sort(key=lambda e: e.score, reverse=True)
        self._entries = entries
        self._last_update_at = now
        return list(entries)

    def optimal_target(self) -> PriorityEntry | None:
        entries = self.update()
        return entries[0] if entries else None

    def finisher_targets(self, threshold: int) -> list[PriorityEntry]:
        """Cached entries at or below *threshold* health, in priority order."""
        return [e for e in self._entries if e.health <= threshold]
