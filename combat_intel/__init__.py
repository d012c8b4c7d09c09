"""Combat decision engine: five analyzers fused into one recommendation per tick."""

from combat_intel.config import CombatConfig
from combat_intel.engine import CombatEngine

__all__ = ["CombatConfig", "CombatEngine"]
__version__ = "0.1.0"
