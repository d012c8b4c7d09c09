"""Seeded randomness for PackScenario: spawn tiles, walls, approach moves,
damage rolls and per-tick spell castability.

Every draw is a pure function of (seed, domain, entity_id, tick), so a
headless run and its replay file see the same fight regardless of how many
draws other hostiles made before them.
"""

from __future__ import annotations

import struct

import xxhash

from combat_intel.core.enums import Domain


class DeterministicRNG:
    """Stateless pseudo-random source keyed by domain, entity and tick."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    def _hash(self, domain: Domain, entity_id: int, tick: int) -> int:
        # The scenario seed becomes the xxh64 seed, so it must fit in 64 bits.
        payload = struct.pack("<Bqq", domain.value, entity_id, tick)
        return xxhash.xxh64(payload, seed=self._seed & self._MAX_UINT64).intdigest()

    def next_float(self, domain: Domain, entity_id: int, tick: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, entity_id, tick) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, entity_id: int, tick: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, entity_id, tick)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, entity_id: int, tick: int, probability: float = 0.5) -> bool:
        return self.next_float(domain, entity_id, tick) < probability

    def choice(self, domain: Domain, entity_id: int, tick: int, options: tuple):
        if not options:
            raise ValueError("choice() needs at least one option")
        return options[self.next_int(domain, entity_id, tick, 0, len(options) - 1)]
