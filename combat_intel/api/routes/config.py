"""/api/v1/config - read and override engine configuration."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from combat_intel.api.dependencies import get_engine_session
from combat_intel.api.session import EngineSession
from combat_intel.api.schemas import ConfigOverride

router = APIRouter()


@router.get("/config")
def get_config(session: EngineSession = Depends(get_engine_session)) -> dict[str, Any]:
    return asdict(session.config)


@router.get("/config/{section}")
def get_config_section(
    section: str,
    session: EngineSession = Depends(get_engine_session),
) -> dict[str, Any]:
    try:
        return asdict(session.config.get(section))
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc


@router.patch("/config/{section}/{key}")
def set_config_value(
    section: str,
    key: str,
    body: ConfigOverride,
    session: EngineSession = Depends(get_engine_session),
) -> dict[str, Any]:
    try:
        config = session.override(section, key, body.value)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc.args[0])) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return asdict(config.get(section))
