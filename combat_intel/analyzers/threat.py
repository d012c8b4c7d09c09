"""ThreatPredictor: per-hostile danger scoring and an aggregate tier.

score = base_danger * distance_factor * flank_multiplier * health_factor
        + running_group_count * group_weight * default_danger

The group bonus grows with each qualifying hostile, so scoring runs in
ascending entity-id order to make the result independent of the order the
world happens to list hostiles in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from combat_intel.analyzers.tables import DEFAULT_DANGER, danger_rating
from combat_intel.core.enums import Direction, ThreatTier
from combat_intel.core.models import HostileSnapshot, Position, is_behind

if TYPE_CHECKING:
    from combat_intel.config import ThreatConfig
    from combat_intel.core.snapshot import SpatialQuery


@dataclass(frozen=True, slots=True)
class ThreatEntry:
    hostile: HostileSnapshot
    name: str
    score: float
    position: Position


@dataclass(frozen=True, slots=True)
class ThreatAnalysis:
    """Result of one threat pass; ``entries`` is sorted by descending score."""

    tier: ThreatTier = ThreatTier.SAFE
    total_threat: float = 0.0
    entries: tuple[ThreatEntry, ...] = field(default_factory=tuple)
    group_count: int = 0
    # Player pose the entries were scored against
    origin: Position | None = None
    facing: Direction = Direction.NORTH


class ThreatPredictor:
    """Scores nearby hostiles by how dangerous they are right now."""

    __slots__ = ("config", "_world", "_last")

    def __init__(self, config: ThreatConfig, world: SpatialQuery) -> None:
        self.config = config
        self._world = world
        self._last = ThreatAnalysis()

    @property
    def last_analysis(self) -> ThreatAnalysis:
        return self._last

    @property
    def threat_level(self) -> ThreatTier:
        return self._last.tier

    def score(self, hostile: HostileSnapshot, origin: Position, facing: Direction) -> float:
        """Raw threat of one hostile, before the group bonus. 0 if out of range."""
        radius = self.config.danger_radius
        distance = origin.chebyshev(hostile.position)
        if distance > radius:
            return 0.0
        distance_factor = (radius - distance + 1) / radius
        flank = self.config.flanker_weight if is_behind(origin, facing, hostile.position) else 1.0
        health_factor = hostile.health_percent / 100
        return danger_rating(hostile.name) * distance_factor * flank * health_factor

    def classify(self, total: float) -> ThreatTier:
        if total >= self.config.critical_threshold:
            return ThreatTier.CRITICAL
        if total >= self.config.high_threshold:
            return ThreatTier.HIGH
        if total > 0:
            return ThreatTier.MODERATE
        return ThreatTier.SAFE

    def analyze(self) -> ThreatAnalysis:
        player = self._world.player()
        origin, facing = player.position, player.direction
        if not self.config.enabled:
            self._last = ThreatAnalysis(origin=origin, facing=facing)
            return self._last

        entries: list[ThreatEntry] = []
        total = 0.0
        group_count = 0
        for hostile in sorted(self._world.live_hostiles(), key=lambda h: h.id):
            threat = self.score(hostile, origin, facing)
            if threat <= 0:
                continue
            group_count += 1
            threat += group_count * self.config.group_weight * DEFAULT_DANGER
            entries.append(ThreatEntry(hostile, hostile.name, threat, hostile.position))
            total += threat

        entries.sort(key=lambda e: e.score, reverse=True)
        self._last = ThreatAnalysis(
            tier=self.classify(total),
            total_threat=total,
            entries=tuple(entries),
            group_count=group_count,
            origin=origin,
            facing=facing,
        )
        return self._last

    def most_threatening(self) -> ThreatEntry | None:
        return self._last.entries[0] if self._last.entries else None

    def flankers(self) -> list[ThreatEntry]:
        """Cached entries standing directly behind the player."""
        last = self._last
        if last.origin is None:
            return []
        return [e for e in last.entries if is_behind(last.origin, last.facing, e.position)]
