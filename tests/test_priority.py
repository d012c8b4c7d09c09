"""Tests for KillPriorityRanker scoring, clamping, ordering and rate limiting."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tests.helpers.arena import CombatArena, ORIGIN
from combat_intel.analyzers.priority import low_hp_multiplier
from combat_intel.config import CombatConfig, KillPriorityConfig


def _score(arena: CombatArena, eid: int) -> float:
    return arena.engine.priority.score(arena.hostiles[eid], ORIGIN)


class TestScoring:
    def test_healthy_default_creature(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=1, dy=0)
        # danger 10/10*30 + loot 100*0.1 - distance 1*2
        assert _score(arena, 1) == pytest.approx(38.0)

    def test_dangerous_valuable_creature(self):
        arena = CombatArena()
        arena.add_hostile(1, "demon", dx=0, dy=-2)
        assert _score(arena, 1) == pytest.approx(300 + 1000 - 4)

    @pytest.mark.parametrize("hp, expected", [(10, 138.0), (15, 138.0), (20, 113.0), (40, 88.0), (41, 38.0)])
    def test_low_hp_tiers(self, hp, expected):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=1, dy=0, hp=hp)
        assert _score(arena, 1) == pytest.approx(expected)

    def test_escape_bonus_inside_window(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=5, dy=0, hp=30)
        assert _score(arena, 1) == pytest.approx(50 + 30 + 10 - 10 + 20)

    def test_no_escape_bonus_at_three_tiles(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=3, dy=0, hp=30)
        assert _score(arena, 1) == pytest.approx(50 + 30 + 10 - 6)

    def test_no_escape_bonus_beyond_radius(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=9, dy=0, hp=30)
        assert _score(arena, 1) == pytest.approx(50 + 30 + 10 - 18)

    def test_never_negative(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=30, dy=0)
        assert _score(arena, 1) == 0.0
        assert arena.engine.priority.update()[0].score == 0.0

    def test_multiplier_table(self):
        assert low_hp_multiplier(0) == 2.0
        assert low_hp_multiplier(25) == 1.5
        assert low_hp_multiplier(26) == 1.0
        assert low_hp_multiplier(100) == 0.0


class TestRanking:
    def test_sorted_descending(self):
        arena = CombatArena()
        specs = [("rat", 3, 90), ("demon", 4, 100), ("dragon", 1, 12), ("hydra", 6, 28), ("orc", 2, 50)]
        for i, (name, dist, hp) in enumerate(specs, start=1):
            arena.add_hostile(i, name, dx=dist, dy=0, hp=hp)
        scores = [e.score for e in arena.engine.priority.update()]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_scan_order(self):
        arena = CombatArena()
        arena.add_hostile(5, "rat", dx=1, dy=0)
        arena.add_hostile(3, "rat", dx=0, dy=1)
        assert [e.hostile.id for e in arena.engine.priority.update()] == [5, 3]

    def test_dead_excluded(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=1, dy=0, hp=0)
        assert arena.engine.priority.update() == []

    def test_optimal_target(self):
        arena = CombatArena()
        assert arena.engine.priority.optimal_target() is None
        arena.tick(1000)
        arena.add_hostile(1, "rat", dx=1, dy=0)
        arena.add_hostile(2, "dragon", dx=2, dy=0)
        assert arena.engine.priority.optimal_target().name == "dragon"

    def test_finisher_targets(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=1, dy=0, hp=50)
        arena.add_hostile(2, "rat", dx=2, dy=0, hp=15)
        arena.add_hostile(3, "rat", dx=3, dy=0, hp=16)
        arena.engine.priority.update()
        assert [e.hostile.id for e in arena.engine.priority.finisher_targets(15)] == [2]


class TestRateLimit:
    def test_cached_between_intervals(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=1, dy=0)
        assert len(arena.engine.priority.update()) == 1

        arena.add_hostile(2, "rat", dx=2, dy=0)
        assert len(arena.engine.priority.update()) == 1
        arena.tick(199)
        assert len(arena.engine.priority.update()) == 1
        arena.tick(1)
        assert len(arena.engine.priority.update()) == 2

    def test_returned_list_is_a_copy(self):
        arena = CombatArena()
        arena.add_hostile(1, "rat", dx=1, dy=0)
        entries = arena.engine.priority.update()
        entries.clear()
        assert len(arena.engine.priority.entries) == 1

    def test_disabled(self):
        arena = CombatArena(config=CombatConfig(priority=KillPriorityConfig(enabled=False)))
        arena.add_hostile(1, "rat", dx=1, dy=0)
        assert arena.engine.priority.update() == []
