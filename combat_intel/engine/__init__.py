"""Decision engine: arbitration of analyzer outputs into one action."""

from combat_intel.engine.actions import (
    AttackAction,
    DefensiveAction,
    FinisherAction,
    NoAction,
    RecommendedAction,
    WaveSpellAction,
)
from combat_intel.engine.arbiter import CombatAnalysis, CombatEngine

__all__ = [
    "AttackAction",
    "CombatAnalysis",
    "CombatEngine",
    "DefensiveAction",
    "FinisherAction",
    "NoAction",
    "RecommendedAction",
    "WaveSpellAction",
]
