"""GET /api/v1/analysis/* - cached analyzer results, no recomputation."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from combat_intel.api.dependencies import get_engine_session
from combat_intel.api.session import EngineSession
from combat_intel.api.schemas import (
    DecisionEventSchema,
    PositionSchema,
    PriorityEntrySchema,
    StackResponse,
    SummaryResponse,
    ThreatEntrySchema,
    ThreatResponse,
)

router = APIRouter()


def _pos(p) -> PositionSchema:
    return PositionSchema(x=p.x, y=p.y, z=p.z)


@router.get("/analysis/threat", response_model=ThreatResponse)
def get_threat(session: EngineSession = Depends(get_engine_session)) -> ThreatResponse:
    engine = session.engine
    threat = engine.last_threat
    return ThreatResponse(
        tier=threat.tier.value,
        total_threat=threat.total_threat,
        group_count=threat.group_count,
        entries=[
            ThreatEntrySchema(id=e.hostile.id, name=e.name, score=e.score, position=_pos(e.position))
            for e in threat.entries
        ],
        flankers=[e.hostile.id for e in engine.flankers()],
    )


@router.get("/analysis/priorities", response_model=list[PriorityEntrySchema])
def get_priorities(session: EngineSession = Depends(get_engine_session)) -> list[PriorityEntrySchema]:
    return [
        PriorityEntrySchema(
            id=e.hostile.id, name=e.name, health=e.health, score=e.score, position=_pos(e.position),
        )
        for e in session.engine.last_priorities
    ]


@router.get("/analysis/stack", response_model=StackResponse)
def get_stack(session: EngineSession = Depends(get_engine_session)) -> StackResponse:
    stack = session.engine.last_stack
    if stack is None:
        raise HTTPException(status_code=404, detail="No stack analysis yet")
    return StackResponse(
        total=stack.total,
        stationary=stack.stationary,
        is_optimal=stack.is_optimal,
        stack_ratio=stack.stack_ratio,
    )


@router.get("/summary", response_model=SummaryResponse)
def get_summary(session: EngineSession = Depends(get_engine_session)) -> SummaryResponse:
    return SummaryResponse(text=session.summary())


@router.get("/decisions", response_model=list[DecisionEventSchema])
def get_decisions(
    count: int = Query(50, ge=1, le=500),
    session: EngineSession = Depends(get_engine_session),
) -> list[DecisionEventSchema]:
    return [
        DecisionEventSchema(
            sequence=e.sequence, timestamp_ms=e.timestamp_ms, kind=e.kind,
            reason=e.reason, next_spell=e.next_spell,
        )
        for e in session.recent(count)
    ]
