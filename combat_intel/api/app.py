"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from combat_intel.api.dependencies import set_engine_session
from combat_intel.api.session import EngineSession
from combat_intel.api.routes import api_router
from combat_intel.config import CombatConfig
from combat_intel.systems.clock import Clock, monotonic_ms
from combat_intel.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: CombatConfig | None = None, clock: Clock = monotonic_ms) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if config is None:
        config = CombatConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        set_engine_session(EngineSession(_config, clock))
        logger.info("Combat engine API started.")
        yield
        set_engine_session(None)
        logger.info("Combat engine API shutting down.")

    app = FastAPI(
        title="Combat Decision Engine",
        description=(
            "Per-tick combat advisor.\n\n"
            "## API Groups\n\n"
            "- **Decide** - Push a world snapshot, receive one recommended action\n"
            "- **Analysis** - Cached threat, priority and stack results plus a text summary\n"
            "- **Config** - Read and override analyzer settings\n"
            "- **Control** - Reset analyzer memory\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(api_router)
    return app
