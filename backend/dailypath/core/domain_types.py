"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PathKey is always produced by core.path_key.encode_path_key
    - Level numbers are 1..LEVEL_COUNT; level indexes are 0..LEVEL_COUNT-1
    - Base points are bounded 0..MAX_BASE_POINTS
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PathKey = NewType("PathKey", str)
DateISO = NewType("DateISO", str)           # YYYY-MM-DD, reference timezone


# ─── Game Constants ──────────────────────────────────────────────

LEVEL_COUNT: int = 5
MAX_BASE_POINTS: int = 100
PATH_SEPARATOR: str = ">"

# Permutation seed base; fixed forever once any date has been committed.
PICKER_SEED_BASE: int = 0xC0FFEE

# Session timing (seconds). FINAL_REVEAL_HOLD must not exceed REVEAL_HOLD.
TICK_SECONDS: float = 1.0
COUNTDOWN_START_DELAY: float = 1.0
REVEAL_HOLD: float = 2.0
FINAL_REVEAL_HOLD: float = 0.5

SKIPPED_GUESS_TEXT: str = "Skipped"
DEFAULT_SHARE_TITLE: str = "Daily Paths"


# ─── Enums ───────────────────────────────────────────────────────

class PuzzleSource(str, Enum):
    """How a DailyPuzzleSet was resolved."""
    OVERRIDE = "override"
    COMMITTED = "committed"
    PREVIEW = "preview"


class StoreSlot(str, Enum):
    """Per-day slots in the distribution store."""
    OVERRIDE = "override"
    COMMITTED = "committed"


class GamePhase(str, Enum):
    """Session state machine states."""
    NOT_STARTED = "not_started"
    LEVEL_ACTIVE = "level_active"
    LEVEL_FEEDBACK = "level_feedback"
    COMPLETE = "complete"
