"""Core data models and world boundary."""

from combat_intel.core.enums import (
    ActionKind, ComboType, Direction, Domain, Material, ThreatTier, Vocation, WaveShape,
)
from combat_intel.core.grid import Grid
from combat_intel.core.models import HostileSnapshot, PlayerState, Position
from combat_intel.core.snapshot import CombatSnapshot, SnapshotWorld, SpatialQuery

__all__ = [
    "ActionKind",
    "CombatSnapshot",
    "ComboType",
    "Direction",
    "Domain",
    "Grid",
    "HostileSnapshot",
    "Material",
    "PlayerState",
    "Position",
    "SnapshotWorld",
    "SpatialQuery",
    "ThreatTier",
    "Vocation",
    "WaveShape",
]
