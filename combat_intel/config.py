"""Engine configuration with sensible defaults.

Each analyzer owns one frozen section; ``CombatConfig`` aggregates them.
Sections validate themselves on construction so malformed settings are
rejected once instead of on every tick.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


@dataclass(frozen=True)
class WaveConfig:
    """Multi-target wave optimizer."""

    enabled: bool = True
    min_monsters: int = 2              # Minimum hits for a wave to be worth casting
    optimal_monsters: int = 4          # Hit count considered full efficiency
    reposition_cooldown_ms: int = 2000  # Quiet period after suggesting a reposition
    reposition_radius: int = 2         # Neighbourhood scanned for a better origin (5x5)

    def __post_init__(self) -> None:
        _require(self.min_monsters >= 1, "wave.min_monsters must be >= 1")
        _require(self.optimal_monsters >= 1, "wave.optimal_monsters must be >= 1")
        _require(self.reposition_cooldown_ms >= 0, "wave.reposition_cooldown_ms must be >= 0")
        _require(self.reposition_radius >= 0, "wave.reposition_radius must be >= 0")


@dataclass(frozen=True)
class ComboConfig:
    """Vocation spell combo sequencer."""

    enabled: bool = True
    min_mana_percent: int = 30
    burst_threshold: int = 3           # Hostiles around the player that trigger aoe_burst
    finisher_threshold: int = 15       # Target HP% at or below which finishers are used
    combo_cooldown_ms: int = 1000      # Pause after a full sequence completes

    def __post_init__(self) -> None:
        _require(0 <= self.min_mana_percent <= 100, "combo.min_mana_percent must be within 0..100")
        _require(self.burst_threshold >= 1, "combo.burst_threshold must be >= 1")
        _require(0 <= self.finisher_threshold <= 100, "combo.finisher_threshold must be within 0..100")
        _require(self.combo_cooldown_ms >= 0, "combo.combo_cooldown_ms must be >= 0")


@dataclass(frozen=True)
class ThreatConfig:
    """Threat prediction."""

    enabled: bool = True
    danger_radius: int = 5
    flanker_weight: float = 1.5        # Multiplier for hostiles directly behind the player
    group_weight: float = 0.5          # Running bonus per qualifying hostile
    high_threshold: float = 100.0
    critical_threshold: float = 200.0

    def __post_init__(self) -> None:
        _require(self.danger_radius >= 1, "threat.danger_radius must be >= 1")
        _require(self.flanker_weight >= 1.0, "threat.flanker_weight must be >= 1.0")
        _require(self.group_weight >= 0.0, "threat.group_weight must be >= 0")
        _require(
            0.0 < self.high_threshold <= self.critical_threshold,
            "threat thresholds must satisfy 0 < high <= critical",
        )


@dataclass(frozen=True)
class KillPriorityConfig:
    """Kill priority ranking."""

    enabled: bool = True
    low_hp_bonus: float = 50.0
    danger_bonus: float = 30.0
    loot_value_weight: float = 0.1
    distance_penalty: float = 2.0      # Priority lost per tile of distance
    escape_radius: int = 8
    escape_bonus: float = 20.0         # Low-HP hostile drifting away
    update_interval_ms: int = 200

    def __post_init__(self) -> None:
        _require(self.escape_radius >= 0, "priority.escape_radius must be >= 0")
        _require(self.distance_penalty >= 0.0, "priority.distance_penalty must be >= 0")
        _require(self.update_interval_ms >= 0, "priority.update_interval_ms must be >= 0")


@dataclass(frozen=True)
class AreaTimingConfig:
    """Area spell timing (stack detection)."""

    enabled: bool = True
    stack_radius: int = 3
    min_stack_size: int = 3
    max_wait_ms: int = 2000
    moving_ratio_threshold: float = 0.5   # Keep waiting while stationary/total is below this

    def __post_init__(self) -> None:
        _require(self.stack_radius >= 0, "timing.stack_radius must be >= 0")
        _require(self.min_stack_size >= 1, "timing.min_stack_size must be >= 1")
        _require(self.max_wait_ms >= 0, "timing.max_wait_ms must be >= 0")
        _require(
            0.0 <= self.moving_ratio_threshold <= 1.0,
            "timing.moving_ratio_threshold must be within 0..1",
        )


_SECTIONS = ("wave", "combo", "threat", "priority", "timing")


@dataclass(frozen=True)
class CombatConfig:
    """Immutable configuration for one combat engine."""

    wave: WaveConfig = field(default_factory=WaveConfig)
    combo: ComboConfig = field(default_factory=ComboConfig)
    threat: ThreatConfig = field(default_factory=ThreatConfig)
    priority: KillPriorityConfig = field(default_factory=KillPriorityConfig)
    timing: AreaTimingConfig = field(default_factory=AreaTimingConfig)

    # Logging
    log_level: str = "INFO"
    replay_file: str = "decisions.json"

    @staticmethod
    def sections() -> tuple[str, ...]:
        return _SECTIONS

    def section(self, name: str) -> Any:
        if name not in _SECTIONS:
            raise KeyError(f"Unknown config section: {name!r}")
        return getattr(self, name)

    def get(self, section: str, key: str | None = None) -> Any:
        """Return a whole section, or one value when *key* is given."""
        sec = self.section(section)
        if key is None:
            return sec
        if key not in {f.name for f in fields(sec)}:
            raise KeyError(f"Unknown key {key!r} in section {section!r}")
        return getattr(sec, key)

    def with_override(self, section: str, key: str, value: Any) -> CombatConfig:
        """Return a copy with ``section.key`` replaced.

        Raises KeyError for unknown names and ValueError when the new value
        fails the section's validation.
        """
        sec = self.section(section)
        known = {f.name: f for f in fields(sec)}
        if key not in known:
            raise KeyError(f"Unknown key {key!r} in section {section!r}")
        current = getattr(sec, key)
        if isinstance(current, bool):
            if not isinstance(value, bool):
                raise ValueError(f"{section}.{key} expects a boolean")
        elif isinstance(current, int):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{section}.{key} expects an integer")
        elif isinstance(current, float):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{section}.{key} expects a number")
            value = float(value)
        return replace(self, **{section: replace(sec, **{key: value})})
