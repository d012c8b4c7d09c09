"""Versioned API route modules."""

from fastapi import APIRouter

from combat_intel.api.routes.analysis import router as analysis_router
from combat_intel.api.routes.config import router as config_router
from combat_intel.api.routes.control import router as control_router
from combat_intel.api.routes.decide import router as decide_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(decide_router, tags=["Decide"])
api_router.include_router(analysis_router, tags=["Analysis"])
api_router.include_router(config_router, tags=["Config"])
api_router.include_router(control_router, tags=["Control"])

__all__ = ["api_router"]
