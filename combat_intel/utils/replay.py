"""Replay serialization: per-tick decisions of a scenario run as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from combat_intel.engine.actions import to_payload

if TYPE_CHECKING:
    from combat_intel.core.snapshot import CombatSnapshot
    from combat_intel.engine.actions import RecommendedAction

logger = logging.getLogger(__name__)


class DecisionRecorder:
    """Accumulates tick decisions and flushes them to a JSON file."""

    __slots__ = ("_path", "_seed", "_ticks")

    def __init__(self, path: str | Path, seed: int) -> None:
        self._path = Path(path)
        self._seed = seed
        self._ticks: list[dict[str, Any]] = []

    @property
    def ticks(self) -> list[dict[str, Any]]:
        return list(self._ticks)

    def record_tick(
        self,
        snapshot: CombatSnapshot,
        action: RecommendedAction,
        next_spell: str | None,
    ) -> None:
        self._ticks.append({
            "tick": snapshot.tick,
            "hostiles": [
                {
                    "id": h.id,
                    "name": h.name,
                    "pos": [h.position.x, h.position.y, h.position.z],
                    "hp": h.health_percent,
                }
                for h in snapshot.hostiles
                if h.is_alive
            ],
            "target": snapshot.target_id,
            "decision": to_payload(action),
            "next_spell": next_spell,
        })

    def flush(self) -> Path:
        data = {"seed": self._seed, "total_ticks": len(self._ticks), "ticks": self._ticks}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2))
        logger.info("Replay saved to %s (%d ticks)", self._path, len(self._ticks))
        return self._path
