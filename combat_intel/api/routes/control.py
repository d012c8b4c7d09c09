"""POST /api/v1/reset - drop all analyzer memory."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from combat_intel.api.dependencies import get_engine_session
from combat_intel.api.session import EngineSession
from combat_intel.api.schemas import ControlResponse

router = APIRouter()


@router.post("/reset", response_model=ControlResponse)
def reset(session: EngineSession = Depends(get_engine_session)) -> ControlResponse:
    session.reset()
    return ControlResponse(status="ok", message="Engine reset.")
