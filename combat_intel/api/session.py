"""EngineSession: one CombatEngine shared by the API routes.

FastAPI runs sync routes on a thread pool while the engine is not
re-entrant, so every call into it goes through one lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from combat_intel.config import CombatConfig
from combat_intel.core.enums import Material
from combat_intel.core.grid import Grid
from combat_intel.core.models import HostileSnapshot, PlayerState, Position
from combat_intel.core.snapshot import CombatSnapshot, SnapshotWorld
from combat_intel.engine.actions import RecommendedAction, to_payload
from combat_intel.engine.arbiter import CombatEngine
from combat_intel.engine.summary import format_summary
from combat_intel.systems.clock import Clock, monotonic_ms
from combat_intel.utils.event_log import DecisionEvent, DecisionLog

logger = logging.getLogger(__name__)

_GRID_RADIUS = 8


def snapshot_from_request(req: Any) -> CombatSnapshot:
    """Build a CombatSnapshot from a validated SnapshotRequest."""
    p = req.player
    origin = Position(p.position.x, p.position.y, p.position.z)
    player = PlayerState(origin, p.direction, p.mana_percent, p.vocation_id)
    hostiles = tuple(
        HostileSnapshot(
            h.id, h.name, Position(h.position.x, h.position.y, h.position.z),
            h.health_percent, h.alive,
        )
        for h in req.hostiles
    )
    grid = Grid.around(origin, _GRID_RADIUS)
    for tile in req.blocked_tiles:
        grid.set(Position(tile.x, tile.y, tile.z), Material.WALL)
    castable = frozenset(req.castable) if req.castable is not None else None
    return CombatSnapshot(player, hostiles, req.target_id, grid, castable)


class EngineSession:
    """Holds the engine, its world view and the recent decision log."""

    def __init__(self, config: CombatConfig, clock: Clock = monotonic_ms) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._log = DecisionLog()
        self._config = config
        self._build(config)

    def _build(self, config: CombatConfig) -> None:
        empty = CombatSnapshot(PlayerState(Position()))
        self._world = SnapshotWorld(empty)
        self._engine = CombatEngine(self._world, config, self._clock)

    @property
    def config(self) -> CombatConfig:
        return self._config

    @property
    def engine(self) -> CombatEngine:
        return self._engine

    def decide(self, snapshot: CombatSnapshot) -> tuple[RecommendedAction, str | None, DecisionEvent]:
        with self._lock:
            self._world.update(snapshot)
            action = self._engine.get_recommended_action()
            spell = self._engine.next_spell()
            event = self._log.append(
                self._clock(), action.kind.value, action.reason, spell, to_payload(action),
            )
        return action, spell, event

    def record_cast(self, spell: str | None) -> None:
        with self._lock:
            self._engine.record_cast(spell)

    def summary(self) -> str:
        with self._lock:
            return format_summary(self._engine, refresh=False)

    def recent(self, count: int) -> list[DecisionEvent]:
        return self._log.latest(count)

    def override(self, section: str, key: str, value: Any) -> CombatConfig:
        with self._lock:
            config = self._config.with_override(section, key, value)
            self._engine.configure(config)
            self._config = config
        logger.info("Config %s.%s set to %r", section, key, value)
        return config

    def reset(self) -> None:
        with self._lock:
            self._build(self._config)
            self._log.clear()
        logger.info("Engine state reset.")
