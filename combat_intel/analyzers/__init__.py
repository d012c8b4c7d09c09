"""Analyzers: wave placement, threat, kill priority, stack timing, combos."""

from combat_intel.analyzers.combo import ComboCursor, ComboPlan, ComboSequencer
from combat_intel.analyzers.priority import KillPriorityRanker, PriorityEntry
from combat_intel.analyzers.threat import ThreatAnalysis, ThreatEntry, ThreatPredictor
from combat_intel.analyzers.timing import AreaTimingAnalyzer, StackAnalysis
from combat_intel.analyzers.wave import WaveOptimizer, WaveResult

__all__ = [
    "AreaTimingAnalyzer",
    "ComboCursor",
    "ComboPlan",
    "ComboSequencer",
    "KillPriorityRanker",
    "PriorityEntry",
    "StackAnalysis",
    "ThreatAnalysis",
    "ThreatEntry",
    "ThreatPredictor",
    "WaveOptimizer",
    "WaveResult",
]
