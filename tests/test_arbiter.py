"""Tests for CombatEngine arbitration: cascade order, reasons and accessors."""

import sys
import os
import logging

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tests.helpers.arena import CombatArena, ORIGIN
from combat_intel.config import CombatConfig, ThreatConfig
from combat_intel.core.enums import ActionKind, Direction, ThreatTier
from combat_intel.engine.actions import (
    AttackAction,
    DefensiveAction,
    FinisherAction,
    NoAction,
    WaveSpellAction,
    describe,
    to_payload,
)
from combat_intel.engine.arbiter import CombatEngine
from combat_intel.engine.summary import format_summary

_WEDGE = [(-1, -1), (0, -1), (1, -1), (0, -2)]


def _wedge(arena: CombatArena, name: str) -> None:
    for i, (dx, dy) in enumerate(_WEDGE, start=1):
        arena.add_hostile(i, name, dx=dx, dy=dy)


class TestCascade:
    def test_nothing_around(self):
        arena = CombatArena()
        action = arena.engine.get_recommended_action()
        assert isinstance(action, NoAction)
        assert action.kind is ActionKind.NONE
        assert action.reason == "No combat action needed"

    def test_critical_threat_beats_wave(self):
        arena = CombatArena()
        _wedge(arena, "demon")
        action = arena.engine.get_recommended_action()
        assert isinstance(action, DefensiveAction)
        assert action.reason == "Critical threat level detected"
        assert action.threat.tier is ThreatTier.CRITICAL
        assert action.threat.total_threat == pytest.approx(430.0)

    def test_wave_with_four_targets(self):
        arena = CombatArena()
        _wedge(arena, "rat")
        action = arena.engine.get_recommended_action()
        assert isinstance(action, WaveSpellAction)
        assert action.reason == "Optimal wave position: 4 targets"
        assert action.direction is Direction.NORTH
        assert action.wave.position == ORIGIN

    def test_three_targets_is_not_enough_for_wave(self):
        arena = CombatArena()
        for i, (dx, dy) in enumerate(_WEDGE[:3], start=1):
            arena.add_hostile(i, "rat", dx=dx, dy=dy)
        action = arena.engine.get_recommended_action()
        assert isinstance(action, AttackAction)
        assert arena.engine.last_wave.monster_count == 3

    def test_moving_pack_holds_wave(self):
        arena = CombatArena()
        _wedge(arena, "rat")
        assert isinstance(arena.engine.get_recommended_action(), WaveSpellAction)

        arena.move_hostile(1, 0, -1)
        arena.move_hostile(3, 0, -1)
        arena.move_hostile(4, 0, -1)
        action = arena.engine.get_recommended_action()
        assert arena.engine.last_wave.monster_count == 4
        assert arena.engine.timing.waiting
        assert isinstance(action, AttackAction)
        assert action.reason == "Optimal target: rat"

    def test_finisher_picks_lowest_health(self):
        arena = CombatArena()
        arena.add_hostile(1, "demon", dx=0, dy=-4)
        arena.add_hostile(2, "rat", dx=0, dy=-1, hp=10)
        arena.add_hostile(3, "rat", dx=0, dy=-2, hp=5)
        action = arena.engine.get_recommended_action()
        assert isinstance(action, FinisherAction)
        assert action.target.hostile.id == 3
        assert [c.hostile.id for c in action.candidates] == [2, 3]
        assert action.reason == "2 low HP target(s) - prevent escape"

    def test_finisher_tie_keeps_priority_order(self):
        arena = CombatArena()
        arena.add_hostile(6, "rat", dx=3, dy=0, hp=10)
        arena.add_hostile(5, "rat", dx=0, dy=-1, hp=10)
        action = arena.engine.get_recommended_action()
        assert isinstance(action, FinisherAction)
        assert action.target.hostile.id == 5

    def test_attack_top_priority(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=0, dy=-1)
        arena.add_hostile(2, "dragon", dx=0, dy=3)
        action = arena.engine.get_recommended_action()
        assert isinstance(action, AttackAction)
        assert action.target.name == "dragon"
        assert action.reason == "Optimal target: dragon"

    def test_other_floor_ignored(self):
        arena = CombatArena()
        for i, (dx, dy) in enumerate(_WEDGE, start=1):
            arena.add_hostile(i, "demon", dx=dx, dy=dy, dz=1)
        assert isinstance(arena.engine.get_recommended_action(), NoAction)


class TestConfiguration:
    def test_configure_changes_thresholds(self):
        arena = CombatArena()
        _wedge(arena, "rat")
        arena.engine.configure(CombatConfig(threat=ThreatConfig(high_threshold=40.0, critical_threshold=80.0)))
        action = arena.engine.get_recommended_action()
        assert isinstance(action, DefensiveAction)
        assert action.threat.total_threat == pytest.approx(88.0)

    def test_bad_world(self):
        with pytest.raises(TypeError):
            CombatEngine(object())

    def test_bad_clock(self):
        arena = CombatArena()
        with pytest.raises(TypeError):
            CombatEngine(arena.world, clock=5)


class TestAccessors:
    def test_cached_results_follow_last_call(self):
        arena = CombatArena()
        engine = arena.engine
        assert engine.last_action is None
        assert engine.last_stack is None
        assert engine.last_threat.tier is ThreatTier.SAFE

        _wedge(arena, "rat")
        action = engine.get_recommended_action()
        assert engine.last_action is action
        assert engine.last_threat.tier is ThreatTier.MODERATE
        assert len(engine.last_priorities) == 4
        assert engine.last_stack.total == 4
        assert engine.last_wave.monster_count == 4

    def test_flankers(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=0, dy=2)
        arena.add_hostile(2, "rat", dx=0, dy=-2)
        arena.engine.get_recommended_action()
        assert [f.hostile.id for f in arena.engine.flankers()] == [1]

    def test_analyze_runs_everything(self):
        arena = CombatArena()
        _wedge(arena, "rat")
        analysis = arena.engine.analyze()
        assert analysis.wave.monster_count == 4
        assert analysis.combo.spells == ("exevo gran mas vis", "exevo vis hur")
        assert analysis.threat.group_count == 4
        assert len(analysis.priorities) == 4
        assert analysis.stack.is_optimal

    def test_next_spell_and_record(self):
        arena = CombatArena()
        assert arena.engine.next_spell() == "exori gran vis"
        arena.engine.record_cast("exori gran vis")
        assert arena.engine.next_spell() == "exori vis"

    def test_logs_when_action_type_changes(self, caplog):
        arena = CombatArena()
        with caplog.at_level(logging.INFO, logger="combat_intel.engine.arbiter"):
            arena.engine.get_recommended_action()
            arena.engine.get_recommended_action()
            arena.add_hostile(1, "rat")
            arena.tick(200)
            arena.engine.get_recommended_action()
        infos = [
            r for r in caplog.records
            if r.name == "combat_intel.engine.arbiter" and r.levelno == logging.INFO
        ]
        assert len(infos) == 2
        assert "ATTACK rat" in infos[1].getMessage()


class TestRendering:
    def test_describe_and_payload(self):
        arena = CombatArena()
        _wedge(arena, "rat")
        action = arena.engine.get_recommended_action()
        assert describe(action) == "WAVE small NORTH x4"
        payload = to_payload(action)
        assert payload["kind"] == "wave_spell"
        assert payload["wave"]["direction"] == "north"
        assert payload["wave"]["position"] == {"x": 100, "y": 100, "z": 7}

    def test_summary(self):
        arena = CombatArena()
        _wedge(arena, "rat")
        text = format_summary(arena.engine)
        assert text.startswith("=== Combat Intelligence ===")
        assert "[Threat Level]: MODERATE (4 threats, score: 88)" in text
        assert "[Wave Optimizer]: 4 targets | Direction: North" in text
        assert "[Area Timing]: 4/4 stationary | OPTIMAL" in text
        assert "  1. rat (100% HP) - Priority: 38" in text
        assert "FLANKERS" not in text

    def test_summary_flankers(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=0, dy=2)
        text = format_summary(arena.engine)
        assert "[!] FLANKERS DETECTED: 1" in text
        assert "  - rat (behind you!)" in text

    def test_cached_summary_of_fresh_engine(self):
        arena = CombatArena()
        text = format_summary(arena.engine, refresh=False)
        assert "[Threat Level]: SAFE" in text
        assert "[Kill Priority]" not in text
