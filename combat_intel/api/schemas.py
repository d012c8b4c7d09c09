"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from combat_intel.core.enums import Direction


# --- Request ---

class PositionSchema(BaseModel):
    x: int
    y: int
    z: int = 7


class PlayerSchema(BaseModel):
    position: PositionSchema
    direction: Direction = Direction.NORTH
    mana_percent: int = Field(100, ge=0, le=100)
    vocation_id: int = 0


class HostileSchema(BaseModel):
    id: int
    name: str
    position: PositionSchema
    health_percent: int = Field(100, ge=0, le=100)
    alive: bool = True


class SnapshotRequest(BaseModel):
    """One tick of world state pushed by the host."""

    player: PlayerSchema
    hostiles: list[HostileSchema] = Field(default_factory=list)
    target_id: int | None = None
    blocked_tiles: list[PositionSchema] = Field(
        default_factory=list, description="Non-walkable tiles near the player",
    )
    castable: list[str] | None = Field(
        None, description="Spells castable right now; omit to treat every spell as castable",
    )


class ConfigOverride(BaseModel):
    value: Any


# --- Response ---

class PriorityEntrySchema(BaseModel):
    id: int
    name: str
    health: int
    score: float
    position: PositionSchema


class ThreatEntrySchema(BaseModel):
    id: int
    name: str
    score: float
    position: PositionSchema


class ThreatResponse(BaseModel):
    tier: str
    total_threat: float
    group_count: int
    entries: list[ThreatEntrySchema] = Field(default_factory=list)
    flankers: list[int] = Field(default_factory=list)


class StackResponse(BaseModel):
    total: int
    stationary: int
    is_optimal: bool
    stack_ratio: float


class DecisionResponse(BaseModel):
    kind: str
    reason: str
    payload: dict[str, Any] = Field(default_factory=dict)
    next_spell: str | None = None
    sequence: int = 0


class DecisionEventSchema(BaseModel):
    sequence: int
    timestamp_ms: int
    kind: str
    reason: str
    next_spell: str | None = None


class SummaryResponse(BaseModel):
    text: str


class ControlResponse(BaseModel):
    status: str
    message: str
