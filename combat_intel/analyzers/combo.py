"""ComboSequencer: steps through a vocation's spell sequence.

The sequence is chosen from the combat posture (finisher, aoe_burst,
single_target). The cursor is keyed by (vocation, combo_type); when the key
changes the cursor starts over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from combat_intel.analyzers.tables import combo_sequence, vocation_from_id
from combat_intel.core.enums import ComboType, Vocation
from combat_intel.core.geometry import BURST_AREA, area_tiles

if TYPE_CHECKING:
    from combat_intel.config import ComboConfig
    from combat_intel.core.snapshot import SpatialQuery
    from combat_intel.systems.clock import Clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ComboPlan:
    combo_type: ComboType
    spells: tuple[str, ...]
    vocation: Vocation

    @property
    def key(self) -> tuple[Vocation, ComboType]:
        return self.vocation, self.combo_type


@dataclass(slots=True)
class ComboCursor:
    """Position within the active sequence. ``index`` is 0-based and always
    within ``range(len(spells))``."""

    key: tuple[Vocation, ComboType]
    spells: tuple[str, ...]
    index: int = 0
    advanced_at: int = 0

    @property
    def current(self) -> str:
        return self.spells[self.index]

    def advance(self, now: int) -> bool:
        """Step forward; return True when the sequence wrapped around."""
        self.advanced_at = now
        self.index += 1
        if self.index >= len(self.spells):
            self.index = 0
            return True
        return False


class ComboSequencer:
    """Picks the combo for the current posture and hands out its next spell."""

    __slots__ = ("config", "_world", "_clock", "_cursor", "_completed_at")

    def __init__(self, config: ComboConfig, world: SpatialQuery, clock: Clock) -> None:
        self.config = config
        self._world = world
        self._clock = clock
        self._cursor: ComboCursor | None = None
        self._completed_at: int | None = None

    @property
    def cursor(self) -> ComboCursor | None:
        return self._cursor

    def determine_combo_type(self) -> ComboType:
        target = self._world.target()
        target_hp = target.health_percent if target is not None else 100
        if target_hp <= self.config.finisher_threshold:
            return ComboType.FINISHER
        origin = self._world.player().position
        nearby = self._world.count_hostiles(area_tiles(origin, BURST_AREA))
        if nearby >= self.config.burst_threshold:
            return ComboType.AOE_BURST
        return ComboType.SINGLE_TARGET

    def get_optimal_sequence(self) -> ComboPlan | None:
        if not self.config.enabled:
            return None
        player = self._world.player()
        if player.mana_percent < self.config.min_mana_percent:
            return None
        if (
            self._completed_at is not None
            and self._clock() - self._completed_at < self.config.combo_cooldown_ms
        ):
            return None

        vocation = vocation_from_id(player.vocation_id)
        combo_type = self.determine_combo_type()
        spells = combo_sequence(vocation, combo_type)
        if not spells:
            return None
        return ComboPlan(combo_type, spells, vocation)

    def get_next_spell(self) -> str | None:
        """Return the spell to cast now, or None and move the cursor on."""
        plan = self.get_optimal_sequence()
        if plan is None:
            return None

        if self._cursor is None or self._cursor.key != plan.key:
            logger.debug("Combo reset to %s/%s", plan.vocation.value, plan.combo_type.value)
            self._cursor = ComboCursor(plan.key, plan.spells, 0, self._clock())

        spell = self._cursor.current
        if self._world.can_cast(spell):
            return spell

        self._advance()
        return None

    def record_execution(self, spell: str | None = None) -> None:
        """Note that the current spell was cast and step to the next one."""
        if self._cursor is None:
            return
        if spell is not None and spell != self._cursor.current:
            logger.debug("Recorded %r but cursor is on %r", spell, self._cursor.current)
        self._advance()

    def _advance(self) -> None:
        now = self._clock()
        if self._cursor is not None and self._cursor.advance(now):
            self._completed_at = now
