"""CombatEngine: owns the five analyzers and arbitrates one decision.

Arbitration is a fixed cascade, first match wins:

  1. critical threat           -> defensive
  2. wave >= 4 hits, no wait   -> wave_spell
  3. hostile at finisher HP    -> finisher
  4. any ranked hostile        -> attack
  5. otherwise                 -> none

Scores are never compared across categories.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from combat_intel.analyzers.combo import ComboPlan, ComboSequencer
from combat_intel.analyzers.priority import KillPriorityRanker, PriorityEntry
from combat_intel.analyzers.threat import ThreatAnalysis, ThreatEntry, ThreatPredictor
from combat_intel.analyzers.timing import AreaTimingAnalyzer, StackAnalysis
from combat_intel.analyzers.wave import WaveOptimizer, WaveResult
from combat_intel.config import CombatConfig
from combat_intel.core.enums import ThreatTier
from combat_intel.core.snapshot import SpatialQuery
from combat_intel.engine.actions import (
    AttackAction,
    DefensiveAction,
    FinisherAction,
    NoAction,
    RecommendedAction,
    WaveSpellAction,
    describe,
)
from combat_intel.systems.clock import Clock, monotonic_ms

logger = logging.getLogger(__name__)

# Hit count at which a wave beats single-target play
WAVE_ACTION_MIN_TARGETS = 4


@dataclass(frozen=True, slots=True)
class CombatAnalysis:
    """Every analyzer's view of one tick."""

    wave: WaveResult | None
    combo: ComboPlan | None
    threat: ThreatAnalysis
    priorities: tuple[PriorityEntry, ...]
    stack: StackAnalysis | None


class CombatEngine:
    """Per-tick combat advisor. Reads the world, never changes it.

    Not re-entrant: one caller at a time.
    """

    def __init__(
        self,
        world: SpatialQuery,
        config: CombatConfig | None = None,
        clock: Clock = monotonic_ms,
    ) -> None:
        if not isinstance(world, SpatialQuery):
            raise TypeError("world must implement SpatialQuery")
        if not callable(clock):
            raise TypeError("clock must be a callable returning milliseconds")
        self._config = config or CombatConfig()
        self._world = world
        self._clock = clock

        self.wave = WaveOptimizer(self._config.wave, world, clock)
        self.threat = ThreatPredictor(self._config.threat, world)
        self.priority = KillPriorityRanker(self._config.priority, world, clock)
        self.timing = AreaTimingAnalyzer(self._config.timing, world, clock)
        self.combo = ComboSequencer(self._config.combo, world, clock)

        self._last_action: RecommendedAction | None = None

    # -- configuration --

    @property
    def config(self) -> CombatConfig:
        return self._config

    def configure(self, config: CombatConfig) -> None:
        """Swap in new settings; analyzer memory is kept."""
        self._config = config
        self.wave.config = config.wave
        self.threat.config = config.threat
        self.priority.config = config.priority
        self.timing.config = config.timing
        self.combo.config = config.combo

    # -- cache reads (no recomputation) --

    @property
    def last_threat(self) -> ThreatAnalysis:
        return self.threat.last_analysis

    @property
    def last_priorities(self) -> list[PriorityEntry]:
        return self.priority.entries

    @property
    def last_stack(self) -> StackAnalysis | None:
        return self.timing.last_analysis

    @property
    def last_wave(self) -> WaveResult | None:
        return self.wave.last_result

    @property
    def last_action(self) -> RecommendedAction | None:
        return self._last_action

    def flankers(self) -> list[ThreatEntry]:
        return self.threat.flankers()

    # -- decisions --

    def analyze(self) -> CombatAnalysis:
        """Run every analyzer once without arbitrating."""
        return CombatAnalysis(
            wave=self.wave.find_optimal_cast(),
            combo=self.combo.get_optimal_sequence(),
            threat=self.threat.analyze(),
            priorities=tuple(self.priority.update()),
            stack=self.timing.analyze_stack(),
        )

    def get_recommended_action(self) -> RecommendedAction:
        threat = self.threat.analyze()
        priorities = self.priority.update()
        wave = self.wave.find_optimal_cast()
        stack = self.timing.analyze_stack()

        action = self._arbitrate(threat, priorities, wave, stack)
        if self._last_action is None or type(action) is not type(self._last_action):
            logger.info("Recommendation: %s (%s)", describe(action), action.reason)
        else:
            logger.debug("Recommendation: %s", describe(action))
        self._last_action = action
        return action

    def _arbitrate(
        self,
        threat: ThreatAnalysis,
        priorities: list[PriorityEntry],
        wave: WaveResult | None,
        stack: StackAnalysis | None,
    ) -> RecommendedAction:
        if threat.tier is ThreatTier.CRITICAL:
            return DefensiveAction("Critical threat level detected", threat)

        if (
            wave is not None
            and wave.monster_count >= WAVE_ACTION_MIN_TARGETS
            and not self.timing.should_wait_for_stack(stack)
        ):
            return WaveSpellAction(f"Optimal wave position: {wave.monster_count} targets", wave)

        finishers = [e for e in priorities if e.health <= self._config.combo.finisher_threshold]
        if finishers:
            # min() keeps the first of equal values, i.e. priority order.
            target = min(finishers, key=lambda e: e.health)
            return FinisherAction(
                f"{len(finishers)} low HP target(s) - prevent escape",
                target,
                tuple(finishers),
            )

        if priorities:
            top = priorities[0]
            return AttackAction(f"Optimal target: {top.name}", top)

        return NoAction()

    def next_spell(self) -> str | None:
        return self.combo.get_next_spell()

    def record_cast(self, spell: str | None = None) -> None:
        self.combo.record_execution(spell)
