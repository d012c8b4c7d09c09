"""Read-only world inputs for the engine.

``SpatialQuery`` is the boundary to whatever owns the live game world.
``CombatSnapshot`` is an immutable capture of that world and
``SnapshotWorld`` serves a swappable snapshot through the interface, which
is what the CLI scenario, the HTTP adapter and the tests feed the engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from combat_intel.core.grid import Grid
from combat_intel.core.models import HostileSnapshot, PlayerState, Position


class SpatialQuery(ABC):
    """Queries the engine makes against the world. Implementations must not
    mutate anything in response."""

    @abstractmethod
    def player(self) -> PlayerState:
        """Current player position, facing, mana and vocation."""

    @abstractmethod
    def hostiles(self) -> Sequence[HostileSnapshot]:
        """Visible hostile entities (may include dead ones)."""

    @abstractmethod
    def target(self) -> HostileSnapshot | None:
        """Current combat target, if it is alive and on the player's floor."""

    @abstractmethod
    def is_walkable(self, pos: Position) -> bool:
        """Return True if the player could stand on *pos*."""

    @abstractmethod
    def can_cast(self, spell: str) -> bool:
        """Return True if *spell* is off cooldown and affordable right now."""

    def live_hostiles(self) -> list[HostileSnapshot]:
        """Living hostiles on the player's floor."""
        origin = self.player().position
        return [h for h in self.hostiles() if h.is_alive and h.position.same_floor(origin)]

    def count_hostiles(self, tiles: Iterable[Position]) -> int:
        """Count live hostiles standing on any of *tiles*."""
        covered = set(tiles)
        if not covered:
            return 0
        return sum(1 for h in self.live_hostiles() if h.position in covered)


@dataclass(frozen=True, slots=True)
class CombatSnapshot:
    """Immutable capture of everything one decision cycle reads."""

    player: PlayerState
    hostiles: tuple[HostileSnapshot, ...] = ()
    target_id: int | None = None
    grid: Grid | None = None
    # None means every spell is castable.
    castable: frozenset[str] | None = None
    tick: int = 0
    _by_id: dict[int, HostileSnapshot] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {h.id: h for h in self.hostiles})

    def hostile(self, entity_id: int) -> HostileSnapshot | None:
        return self._by_id.get(entity_id)


class SnapshotWorld(SpatialQuery):
    """SpatialQuery over the most recently supplied CombatSnapshot."""

    __slots__ = ("_snapshot",)

    def __init__(self, snapshot: CombatSnapshot) -> None:
        self._snapshot = snapshot

    def update(self, snapshot: CombatSnapshot) -> None:
        self._snapshot = snapshot

    def player(self) -> PlayerState:
        return self._snapshot.player

    def hostiles(self) -> Sequence[HostileSnapshot]:
        return self._snapshot.hostiles

    def target(self) -> HostileSnapshot | None:
        tid = self._snapshot.target_id
        if tid is None:
            return None
        hostile = self._snapshot.hostile(tid)
        # A dead or off-floor target is no target.
        if hostile is None or not hostile.is_alive:
            return None
        if not hostile.position.same_floor(self._snapshot.player.position):
            return None
        return hostile

    def is_walkable(self, pos: Position) -> bool:
        grid = self._snapshot.grid
        if grid is None:
            return pos.z == self._snapshot.player.position.z
        return grid.is_walkable(pos)

    def can_cast(self, spell: str) -> bool:
        castable = self._snapshot.castable
        return castable is None or spell in castable
