"""POST /api/v1/decide - push one tick of world state, get one decision."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from combat_intel.api.dependencies import get_engine_session
from combat_intel.api.session import EngineSession, snapshot_from_request
from combat_intel.api.schemas import ControlResponse, DecisionResponse, SnapshotRequest
from combat_intel.engine.actions import to_payload

router = APIRouter()


@router.post("/decide", response_model=DecisionResponse)
def decide(
    req: SnapshotRequest,
    session: EngineSession = Depends(get_engine_session),
) -> DecisionResponse:
    action, spell, event = session.decide(snapshot_from_request(req))
    payload = to_payload(action)
    payload.pop("kind")
    payload.pop("reason")
    return DecisionResponse(
        kind=action.kind.value,
        reason=action.reason,
        payload=payload,
        next_spell=spell,
        sequence=event.sequence,
    )


@router.post("/cast", response_model=ControlResponse)
def record_cast(
    spell: str | None = Query(None, description="Spell that was cast"),
    session: EngineSession = Depends(get_engine_session),
) -> ControlResponse:
    session.record_cast(spell)
    return ControlResponse(status="ok", message="Combo advanced.")
