"""RecommendedAction: the engine's single output per tick.

Each variant is its own frozen dataclass carrying a reason and a payload
specific to its kind. Consumers dispatch with ``match``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from combat_intel.analyzers.priority import PriorityEntry
from combat_intel.analyzers.threat import ThreatAnalysis
from combat_intel.analyzers.wave import WaveResult
from combat_intel.core.enums import ActionKind, Direction


@dataclass(frozen=True, slots=True)
class DefensiveAction:
    kind: ClassVar[ActionKind] = ActionKind.DEFENSIVE
    reason: str
    threat: ThreatAnalysis


@dataclass(frozen=True, slots=True)
class WaveSpellAction:
    kind: ClassVar[ActionKind] = ActionKind.WAVE_SPELL
    reason: str
    wave: WaveResult

    @property
    def direction(self) -> Direction:
        return self.wave.direction


@dataclass(frozen=True, slots=True)
class FinisherAction:
    kind: ClassVar[ActionKind] = ActionKind.FINISHER
    reason: str
    target: PriorityEntry
    candidates: tuple[PriorityEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class AttackAction:
    kind: ClassVar[ActionKind] = ActionKind.ATTACK
    reason: str
    target: PriorityEntry


@dataclass(frozen=True, slots=True)
class NoAction:
    kind: ClassVar[ActionKind] = ActionKind.NONE
    reason: str = "No combat action needed"


RecommendedAction = Union[DefensiveAction, WaveSpellAction, FinisherAction, AttackAction, NoAction]


def describe(action: RecommendedAction) -> str:
    """One-line rendering for logs."""
    match action:
        case DefensiveAction(threat=threat):
            return f"DEFENSIVE ({threat.tier.value}, {threat.total_threat:.0f})"
        case WaveSpellAction(wave=wave):
            move = f" from {wave.position}" if wave.needs_reposition else ""
            return f"WAVE {wave.shape.value} {wave.direction.name}{move} x{wave.monster_count}"
        case FinisherAction(target=target):
            return f"FINISH {target.name} ({target.health}%)"
        case AttackAction(target=target):
            return f"ATTACK {target.name} ({target.score:.0f})"
        case NoAction():
            return "NONE"
    raise TypeError(f"Unknown action type: {type(action).__name__}")


def _position(pos) -> dict:
    return {"x": pos.x, "y": pos.y, "z": pos.z}


def _priority(entry: PriorityEntry) -> dict:
    return {
        "id": entry.hostile.id,
        "name": entry.name,
        "health": entry.health,
        "score": round(entry.score, 3),
        "position": _position(entry.position),
    }


def to_payload(action: RecommendedAction) -> dict:
    """Plain-dict form of an action for JSON replay files and the API."""
    out: dict = {"kind": action.kind.value, "reason": action.reason}
    match action:
        case DefensiveAction(threat=threat):
            out["threat"] = {
                "tier": threat.tier.value,
                "total_threat": round(threat.total_threat, 3),
                "group_count": threat.group_count,
            }
        case WaveSpellAction(wave=wave):
            out["wave"] = {
                "position": _position(wave.position),
                "direction": wave.direction.name.lower(),
                "monster_count": wave.monster_count,
                "needs_reposition": wave.needs_reposition,
                "shape": wave.shape.value,
            }
        case FinisherAction(target=target, candidates=candidates):
            out["target"] = _priority(target)
            out["candidates"] = [_priority(c) for c in candidates]
        case AttackAction(target=target):
            out["target"] = _priority(target)
        case NoAction():
            pass
    return out
