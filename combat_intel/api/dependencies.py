"""FastAPI dependency injection: provides the EngineSession singleton."""

from __future__ import annotations

from combat_intel.api.session import EngineSession

_session: EngineSession | None = None


def set_engine_session(session: EngineSession | None) -> None:
    global _session
    _session = session


def get_engine_session() -> EngineSession:
    if _session is None:
        raise RuntimeError("EngineSession not initialized; server not started correctly.")
    return _session
