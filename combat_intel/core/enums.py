"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal facing directions, numbered as the game client reports them."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class Material(IntEnum):
    """Tile materials on the local grid."""

    FLOOR = 0
    WALL = 1
    WATER = 2
    LAVA = 3


@unique
class WaveShape(str, Enum):
    """Named area-effect footprints."""

    SMALL = "small"
    LARGE = "large"


@unique
class ThreatTier(str, Enum):
    """Aggregate danger classification."""

    SAFE = "safe"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


@unique
class ComboType(str, Enum):
    """Combat postures a spell sequence can be built for."""

    AOE_BURST = "aoe_burst"
    SINGLE_TARGET = "single_target"
    FINISHER = "finisher"
    # Table-only: listed in COMBO_SEQUENCES, never picked by determine_combo_type.
    DEFENSIVE = "defensive"
    RANGED = "ranged"
    ELEMENTAL = "elemental"
    SUPPORT_COMBO = "support_combo"


@unique
class Vocation(str, Enum):
    """Caster classes."""

    KNIGHT = "knight"
    PALADIN = "paladin"
    SORCERER = "sorcerer"
    DRUID = "druid"


@unique
class ActionKind(str, Enum):
    """Tags of the recommended-action sum type."""

    DEFENSIVE = "defensive"
    WAVE_SPELL = "wave_spell"
    FINISHER = "finisher"
    ATTACK = "attack"
    NONE = "none"


@unique
class Domain(IntEnum):
    """RNG domains for deterministic scenario randomness."""

    SPAWN = 0
    MOVE = 1
    DAMAGE = 2
    CAST = 3
    TERRAIN = 4
