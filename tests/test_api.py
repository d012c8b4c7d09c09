"""Tests for the HTTP adapter: decide, analysis, config and control routes."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from combat_intel.api.app import create_app
from combat_intel.api.session import EngineSession, snapshot_from_request
from combat_intel.api.schemas import SnapshotRequest
from combat_intel.config import CombatConfig
from combat_intel.core.enums import Material
from combat_intel.core.models import Position
from combat_intel.systems.clock import ManualClock

_WEDGE = [(-1, -1), (0, -1), (1, -1), (0, -2)]


def _request(name: str = "demon", vocation_id: int = 1, **extra) -> dict:
    body = {
        "player": {
            "position": {"x": 100, "y": 100, "z": 7},
            "direction": 0,
            "mana_percent": 100,
            "vocation_id": vocation_id,
        },
        "hostiles": [
            {"id": i, "name": name, "position": {"x": 100 + dx, "y": 100 + dy, "z": 7}}
            for i, (dx, dy) in enumerate(_WEDGE, start=1)
        ],
    }
    body.update(extra)
    return body


@pytest.fixture
def clock():
    return ManualClock(start_ms=5_000)


@pytest.fixture
def client(clock):
    app = create_app(CombatConfig(log_level="WARNING"), clock=clock)
    with TestClient(app) as c:
        yield c


class TestDecide:
    def test_empty_world(self, client):
        r = client.post("/api/v1/decide", json={"player": {"position": {"x": 1, "y": 1}}})
        assert r.status_code == 200
        data = r.json()
        assert data["kind"] == "none"
        assert data["reason"] == "No combat action needed"
        assert data["sequence"] == 1

    def test_defensive_with_payload(self, client):
        data = client.post("/api/v1/decide", json=_request()).json()
        assert data["kind"] == "defensive"
        assert data["reason"] == "Critical threat level detected"
        assert data["payload"]["threat"]["tier"] == "critical"
        assert data["next_spell"] == "exori gran"

    def test_cast_advances_combo(self, client):
        client.post("/api/v1/decide", json=_request())
        r = client.post("/api/v1/cast", params={"spell": "exori gran"})
        assert r.json()["status"] == "ok"
        assert client.post("/api/v1/decide", json=_request()).json()["next_spell"] == "exori"

    def test_invalid_body(self, client):
        r = client.post("/api/v1/decide", json={"hostiles": []})
        assert r.status_code == 422

    def test_health_out_of_range(self, client):
        body = _request()
        body["hostiles"][0]["health_percent"] = 150
        assert client.post("/api/v1/decide", json=body).status_code == 422


class TestAnalysis:
    def test_stack_missing_before_first_decision(self, client):
        assert client.get("/api/v1/analysis/stack").status_code == 404

    def test_cached_results(self, client):
        client.post("/api/v1/decide", json=_request())

        threat = client.get("/api/v1/analysis/threat").json()
        assert threat["tier"] == "critical"
        assert threat["group_count"] == 4
        assert len(threat["entries"]) == 4
        assert threat["flankers"] == []

        priorities = client.get("/api/v1/analysis/priorities").json()
        assert len(priorities) == 4
        assert priorities[0]["name"] == "demon"

        stack = client.get("/api/v1/analysis/stack").json()
        assert stack == {"total": 4, "stationary": 4, "is_optimal": True, "stack_ratio": 1.0}

    def test_summary(self, client):
        client.post("/api/v1/decide", json=_request())
        text = client.get("/api/v1/summary").json()["text"]
        assert "[Threat Level]: CRITICAL" in text

    def test_decisions(self, client, clock):
        client.post("/api/v1/decide", json=_request())
        clock.advance(250)
        client.post("/api/v1/decide", json=_request())
        events = client.get("/api/v1/decisions", params={"count": 1}).json()
        assert len(events) == 1
        assert events[0]["sequence"] == 2
        assert events[0]["timestamp_ms"] == 5_250
        assert events[0]["kind"] == "defensive"


class TestConfig:
    def test_read(self, client):
        cfg = client.get("/api/v1/config").json()
        assert cfg["wave"]["min_monsters"] == 2
        assert client.get("/api/v1/config/timing").json()["max_wait_ms"] == 2000
        assert client.get("/api/v1/config/nope").status_code == 404

    def test_override_changes_decisions(self, client, clock):
        assert client.post("/api/v1/decide", json=_request()).json()["kind"] == "defensive"

        r = client.patch("/api/v1/config/threat/critical_threshold", json={"value": 1000})
        assert r.status_code == 200
        assert r.json()["critical_threshold"] == 1000.0

        clock.advance(250)
        data = client.post("/api/v1/decide", json=_request()).json()
        assert data["kind"] == "wave_spell"
        assert data["reason"] == "Optimal wave position: 4 targets"
        assert data["payload"]["wave"]["direction"] == "north"

    def test_override_errors(self, client):
        assert client.patch("/api/v1/config/nope/x", json={"value": 1}).status_code == 404
        assert client.patch("/api/v1/config/wave/nope", json={"value": 1}).status_code == 404
        assert client.patch("/api/v1/config/wave/min_monsters", json={"value": "abc"}).status_code == 422
        assert client.patch("/api/v1/config/wave/min_monsters", json={"value": 0}).status_code == 422


class TestControl:
    def test_reset(self, client):
        client.post("/api/v1/decide", json=_request())
        r = client.post("/api/v1/reset")
        assert r.json() == {"status": "ok", "message": "Engine reset."}
        assert client.get("/api/v1/analysis/stack").status_code == 404
        assert client.get("/api/v1/decisions").json() == []


class TestSession:
    def test_blocked_tiles_become_walls(self):
        req = SnapshotRequest.model_validate(
            _request(blocked_tiles=[{"x": 101, "y": 100, "z": 7}], castable=["exori"])
        )
        snapshot = snapshot_from_request(req)
        assert snapshot.grid.get(Position(101, 100, 7)) is Material.WALL
        assert snapshot.grid.is_walkable(Position(99, 100, 7))
        assert snapshot.castable == frozenset({"exori"})
        assert snapshot.hostile(2).position == Position(100, 99, 7)

    def test_session_without_server(self):
        session = EngineSession(CombatConfig(), ManualClock())
        req = SnapshotRequest.model_validate(_request(name="rat"))
        action, spell, event = session.decide(snapshot_from_request(req))
        assert action.kind.value == "wave_spell"
        assert spell == "exori gran"
        assert event.sequence == 1
        assert len(session.recent(10)) == 1
