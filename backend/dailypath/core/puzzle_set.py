"""Daily Puzzle Set — resolved puzzles for one date, as served to players.

Invariants:
    - keys are in level order; fewer than LEVEL_COUNT only when a level had no candidates
    - game_number is None for dates before the baseline
    - Immutable once built
"""

from dataclasses import dataclass

from dailypath.core.domain_types import PathKey, PuzzleSource


@dataclass(frozen=True)
class DailyPuzzleSet:
    date_iso: str
    game_number: int | None
    keys: tuple[PathKey, ...]
    source: PuzzleSource
    base_iso: str | None = None
