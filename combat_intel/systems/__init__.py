"""Supporting systems: clocks, deterministic RNG, scenario generation."""

from combat_intel.systems.clock import Clock, ManualClock, monotonic_ms
from combat_intel.systems.rng import DeterministicRNG
from combat_intel.systems.scenario import PackScenario

__all__ = ["Clock", "DeterministicRNG", "ManualClock", "PackScenario", "monotonic_ms"]
