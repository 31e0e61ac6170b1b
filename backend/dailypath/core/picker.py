"""Deterministic Picker — one puzzle key per level from (catalog, date) alone.

Invariants:
    - Output depends only on the set of distinct (level, path_key) pairs and
      the date; never on wall-clock time or catalog row order
    - Each level bucket is deduplicated and sorted (code point order) before
      shuffling
    - Seed per level is PICKER_SEED_BASE + level; the LCG constants below are
      fixed forever (changing them makes committed dates unreproducible)
    - A level with no candidates contributes nothing; the result may hold
      fewer than LEVEL_COUNT keys

Design Decisions:
    - Integer-only LCG (Numerical Recipes constants): identical output on any
      platform, no floating point in the shuffle
"""

from collections.abc import Iterable, Sequence

from dailypath.core.catalog import CandidateRecord
from dailypath.core.domain_types import PathKey, LEVEL_COUNT, PICKER_SEED_BASE
from dailypath.core.game_calendar import day_index

_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_MASK_32 = 0xFFFFFFFF


class Lcg32:
    """32-bit linear congruential generator."""

    def __init__(self, seed: int):
        self.state = seed & _MASK_32

    def next_u32(self) -> int:
        self.state = (_LCG_MULTIPLIER * self.state + _LCG_INCREMENT) & _MASK_32
        return self.state

    def below(self, bound: int) -> int:
        """Uniform-ish integer in [0, bound), equal to floor(u32 / 2**32 * bound)."""
        return (self.next_u32() * bound) >> 32


def seeded_shuffle(items: Sequence[str], seed: int) -> list[str]:
    """Fisher–Yates shuffle driven by Lcg32. Returns a new list."""
    out = list(items)
    rng = Lcg32(seed)
    for i in range(len(out) - 1, 0, -1):
        j = rng.below(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def level_buckets(records: Iterable[CandidateRecord]) -> dict[int, list[PathKey]]:
    """Distinct path keys per level, sorted."""
    buckets: dict[int, set[PathKey]] = {lvl: set() for lvl in range(1, LEVEL_COUNT + 1)}
    for r in records:
        if r.level in buckets:
            buckets[r.level].add(r.path_key)
    return {lvl: sorted(keys) for lvl, keys in buckets.items()}


def pick_daily_keys(records: Iterable[CandidateRecord], date_iso: str) -> list[PathKey]:
    """Up to one key per level 1..LEVEL_COUNT, in level order."""
    idx = day_index(date_iso)
    picked: list[PathKey] = []
    for level, keys in level_buckets(records).items():
        if not keys:
            continue
        perm = seeded_shuffle(keys, PICKER_SEED_BASE + level)
        picked.append(PathKey(perm[idx % len(perm)]))
    return picked
