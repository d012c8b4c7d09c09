"""Static per-creature and per-vocation tables.

Names are matched in lowercase. Unknown creatures fall back to the
``default`` danger tier and ``DEFAULT_LOOT_VALUE``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from combat_intel.core.enums import ComboType, Vocation

# ---------------------------------------------------------------------------
# Danger
# ---------------------------------------------------------------------------

DANGER_TIERS: Mapping[str, int] = MappingProxyType({
    "default": 10,
    "high": 30,
    "very_high": 50,
    "extreme": 100,
})

DEFAULT_DANGER = DANGER_TIERS["default"]

DANGEROUS_CREATURES: Mapping[str, int] = MappingProxyType({
    "demon": DANGER_TIERS["extreme"],
    "behemoth": DANGER_TIERS["extreme"],
    "juggernaut": DANGER_TIERS["extreme"],
    "dragon lord": DANGER_TIERS["very_high"],
    "hydra": DANGER_TIERS["very_high"],
    "hellhound": DANGER_TIERS["very_high"],
    "plaguesmith": DANGER_TIERS["very_high"],
    "giant spider": DANGER_TIERS["high"],
    "dragon": DANGER_TIERS["high"],
    "war golem": DANGER_TIERS["high"],
})


def danger_rating(name: str) -> int:
    return DANGEROUS_CREATURES.get(name.lower(), DEFAULT_DANGER)


# ---------------------------------------------------------------------------
# Loot
# ---------------------------------------------------------------------------

DEFAULT_LOOT_VALUE = 100

LOOT_VALUES: Mapping[str, int] = MappingProxyType({
    "dragon": 500,
    "dragon lord": 2000,
    "demon": 10000,
    "hydra": 3000,
    "giant spider": 800,
    "behemoth": 5000,
})


def loot_value(name: str) -> int:
    return LOOT_VALUES.get(name.lower(), DEFAULT_LOOT_VALUE)


# ---------------------------------------------------------------------------
# Vocations & combos
# ---------------------------------------------------------------------------

# Client vocation ids; promoted vocations are +10.
_VOCATION_IDS: Mapping[int, Vocation] = MappingProxyType({
    1: Vocation.KNIGHT, 11: Vocation.KNIGHT,
    2: Vocation.PALADIN, 12: Vocation.PALADIN,
    3: Vocation.SORCERER, 13: Vocation.SORCERER,
    4: Vocation.DRUID, 14: Vocation.DRUID,
})


def vocation_from_id(vocation_id: int) -> Vocation:
    """Map a client vocation id to a Vocation; unknown ids play as knight."""
    return _VOCATION_IDS.get(vocation_id, Vocation.KNIGHT)


COMBO_SEQUENCES: Mapping[Vocation, Mapping[ComboType, tuple[str, ...]]] = MappingProxyType({
    Vocation.KNIGHT: MappingProxyType({
        ComboType.AOE_BURST: ("exori gran", "exori", "exori min"),
        ComboType.SINGLE_TARGET: ("exori gran ico", "exori ico"),
        ComboType.FINISHER: ("exori ico",),
        ComboType.DEFENSIVE: ("exeta res", "utito tempo"),
    }),
    Vocation.PALADIN: MappingProxyType({
        ComboType.AOE_BURST: ("exori san", "exori gran con"),
        ComboType.SINGLE_TARGET: ("exori con", "exori san"),
        ComboType.RANGED: ("exori gran con",),
        ComboType.FINISHER: ("exori con",),
    }),
    Vocation.SORCERER: MappingProxyType({
        ComboType.AOE_BURST: ("exevo gran mas vis", "exevo vis hur"),
        ComboType.SINGLE_TARGET: ("exori gran vis", "exori vis"),
        ComboType.FINISHER: ("exori mort",),
        ComboType.ELEMENTAL: ("exevo flam hur", "exevo frigo hur", "exevo tera hur"),
    }),
    Vocation.DRUID: MappingProxyType({
        ComboType.AOE_BURST: ("exevo gran mas frigo", "exevo frigo hur"),
        ComboType.SINGLE_TARGET: ("exori gran frigo", "exori frigo"),
        ComboType.SUPPORT_COMBO: ("exura gran mas res", "exevo gran mas frigo"),
        ComboType.FINISHER: ("exori mort",),
    }),
})


def combo_sequence(vocation: Vocation, combo_type: ComboType) -> tuple[str, ...] | None:
    return COMBO_SEQUENCES.get(vocation, {}).get(combo_type)
