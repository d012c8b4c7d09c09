"""Deterministic hostile-pack scenario for headless runs.

A pack spawns around the player, closes in over the following ticks and
takes damage while the player fights. Every random draw goes through
DeterministicRNG so a seed always replays the same fight.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from combat_intel.analyzers.tables import COMBO_SEQUENCES, vocation_from_id
from combat_intel.core.enums import Direction, Domain, Material
from combat_intel.core.grid import Grid
from combat_intel.core.models import HostileSnapshot, PlayerState, Position
from combat_intel.core.snapshot import CombatSnapshot
from combat_intel.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

DEFAULT_PACK: tuple[str, ...] = (
    "dragon", "dragon lord", "hydra", "giant spider", "cyclops", "orc warrior", "demon",
)

_FIRST_HOSTILE_ID = 1000


def _step_toward(src: int, dst: int) -> int:
    if dst > src:
        return 1
    if dst < src:
        return -1
    return 0


class PackScenario:
    """Generates one CombatSnapshot per tick."""

    __slots__ = (
        "_rng", "_player", "_grid", "_hostiles", "_target_id", "_tick",
        "_move_chance", "_splash_chance",
    )

    def __init__(
        self,
        rng: DeterministicRNG,
        player: PlayerState | None = None,
        hostile_count: int = 6,
        spawn_radius: int = 6,
        names: tuple[str, ...] = DEFAULT_PACK,
        wall_density: float = 0.05,
        grid_radius: int = 10,
        move_chance: float = 0.5,
        splash_chance: float = 0.2,
    ) -> None:
        if hostile_count < 0 or spawn_radius < 1 or grid_radius < spawn_radius:
            raise ValueError("Scenario needs hostile_count >= 0 and 1 <= spawn_radius <= grid_radius")
        self._rng = rng
        self._player = player or PlayerState(Position(100, 100, 7), Direction.NORTH, 100, 3)
        self._move_chance = move_chance
        self._splash_chance = splash_chance
        self._tick = 0
        self._grid = self._build_grid(grid_radius, wall_density)
        self._hostiles = self._spawn(hostile_count, spawn_radius, names)
        self._target_id: int | None = None
        self._retarget()

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def finished(self) -> bool:
        return not any(h.is_alive for h in self._hostiles)

    # -- setup --

    def _build_grid(self, radius: int, density: float) -> Grid:
        center = self._player.position
        grid = Grid.around(center, radius)
        side = 2 * radius + 1
        for idx in range(side * side):
            ly, lx = divmod(idx, side)
            pos = Position(grid.origin_x + lx, grid.origin_y + ly, center.z)
            if pos == center:
                continue
            if self._rng.next_bool(Domain.TERRAIN, idx, 0, density):
                grid.set(pos, Material.WALL)
        return grid

    def _spawn(self, count: int, radius: int, names: tuple[str, ...]) -> list[HostileSnapshot]:
        center = self._player.position
        hostiles: list[HostileSnapshot] = []
        taken = {center}
        for i in range(count):
            eid = _FIRST_HOSTILE_ID + i
            for attempt in range(32):
                dx = self._rng.next_int(Domain.SPAWN, eid, attempt * 2, -radius, radius)
                dy = self._rng.next_int(Domain.SPAWN, eid, attempt * 2 + 1, -radius, radius)
                pos = center.offset(dx, dy)
                if pos not in taken and self._grid.is_walkable(pos):
                    break
            else:
                logger.debug("No free spawn tile for hostile %d", eid)
                continue
            taken.add(pos)
            name = self._rng.choice(Domain.SPAWN, eid, 999, names)
            hostiles.append(HostileSnapshot(eid, name, pos, 100, True))
        return hostiles

    def _retarget(self) -> None:
        live = [h for h in self._hostiles if h.is_alive]
        if not live:
            self._target_id = None
            return
        center = self._player.position
        self._target_id = min(live, key=lambda h: (center.chebyshev(h.position), h.id)).id

    # -- simulation --

    def snapshot(self) -> CombatSnapshot:
        vocation = vocation_from_id(self._player.vocation_id)
        spells = sorted({s for seq in COMBO_SEQUENCES[vocation].values() for s in seq})
        castable = frozenset(
            s for i, s in enumerate(spells)
            if self._rng.next_bool(Domain.CAST, i, self._tick, 0.7)
        )
        mana = self._rng.next_int(Domain.CAST, -1, self._tick, 20, 100)
        return CombatSnapshot(
            player=replace(self._player, mana_percent=mana),
            hostiles=tuple(self._hostiles),
            target_id=self._target_id,
            grid=self._grid,
            castable=castable,
            tick=self._tick,
        )

    def step(self) -> CombatSnapshot:
        """Advance one tick and return the new snapshot."""
        self._tick += 1
        tick = self._tick
        center = self._player.position
        occupied = {h.position for h in self._hostiles if h.is_alive}
        occupied.add(center)

        updated: list[HostileSnapshot] = []
        for h in self._hostiles:
            if not h.is_alive:
                continue
            pos = h.position
            if center.chebyshev(pos) > 1 and self._rng.next_bool(Domain.MOVE, h.id, tick, self._move_chance):
                nxt = pos.offset(_step_toward(pos.x, center.x), _step_toward(pos.y, center.y))
                if nxt not in occupied and self._grid.is_walkable(nxt):
                    occupied.discard(pos)
                    occupied.add(nxt)
                    pos = nxt

            hp = h.health_percent
            if h.id == self._target_id:
                hp -= self._rng.next_int(Domain.DAMAGE, h.id, tick, 5, 15)
            elif self._rng.next_bool(Domain.DAMAGE, h.id, tick, self._splash_chance):
                hp -= self._rng.next_int(Domain.DAMAGE, h.id, tick + 1_000_000, 5, 10)
            hp = max(0, hp)
            updated.append(replace(h, position=pos, health_percent=hp, alive=hp > 0))

        self._hostiles = [h for h in updated if h.is_alive]
        if self._target_id not in {h.id for h in self._hostiles}:
            self._retarget()
        return self.snapshot()
