"""Session State — per-device, per-date record of one player's attempt.

Invariants:
    - guesses, awarded_points and base_points_remaining always have slot_count entries
    - A filled guess slot is never overwritten (single guess per level)
    - score == sum(awarded_points)
    - base_points_remaining entries stay within 0..MAX_BASE_POINTS
    - from_record rejects records for another date or another slot count

Design Decisions:
    - Pure dataclass, no IO: persistence and timers live in services.game_session
    - Versioned record (v=1) so a future schema change can ignore old records
"""

from dataclasses import dataclass, field

from dailypath.core.domain_types import MAX_BASE_POINTS

RECORD_VERSION: int = 1


def clamp_base_points(value: int) -> int:
    return max(0, min(MAX_BASE_POINTS, value))


def award_points(base_remaining: int, level_index: int) -> int:
    """Remaining base points times the 1-based level number."""
    return clamp_base_points(base_remaining) * (level_index + 1)


@dataclass
class Guess:
    """One filled slot."""
    text: str
    correct: bool

    def to_dict(self) -> dict:
        return {"guess": self.text, "correct": self.correct}

    @classmethod
    def from_dict(cls, data: dict) -> "Guess":
        return cls(text=str(data["guess"]), correct=bool(data["correct"]))


@dataclass
class SessionState:
    """Guesses, score and countdown pools for one date — pure dataclass, no IO."""

    date: str
    guesses: list[Guess | None] = field(default_factory=list)
    score: int = 0
    awarded_points: list[int] = field(default_factory=list)
    base_points_remaining: list[int] = field(default_factory=list)
    started: bool = False

    @classmethod
    def fresh(cls, date: str, slot_count: int) -> "SessionState":
        return cls(
            date=date,
            guesses=[None] * slot_count,
            awarded_points=[0] * slot_count,
            base_points_remaining=[MAX_BASE_POINTS] * slot_count,
        )

    @property
    def slot_count(self) -> int:
        return len(self.guesses)

    @property
    def all_slots_filled(self) -> bool:
        return self.slot_count > 0 and all(g is not None for g in self.guesses)

    @property
    def any_slot_filled(self) -> bool:
        return any(g is not None for g in self.guesses)

    @property
    def correct_count(self) -> int:
        return sum(1 for g in self.guesses if g is not None and g.correct)

    @property
    def first_open_level(self) -> int | None:
        for i, g in enumerate(self.guesses):
            if g is None:
                return i
        return None

    def next_open_level(self, after: int) -> int | None:
        for i in range(after + 1, self.slot_count):
            if self.guesses[i] is None:
                return i
        return None

    def record_answer(self, index: int, guess: Guess, awarded: int) -> bool:
        """Fill slot index. Returns False (no change) if already filled."""
        if self.guesses[index] is not None:
            return False
        self.guesses[index] = guess
        self.awarded_points[index] = awarded
        self.score += awarded
        self.started = True
        return True

    def decrement_base_points(self, index: int) -> bool:
        """One countdown tick for level index. Returns True if the pool changed."""
        current = self.base_points_remaining[index]
        if current <= 0:
            return False
        self.base_points_remaining[index] = current - 1
        return True

    def to_record(self) -> dict:
        return {
            "v": RECORD_VERSION,
            "date": self.date,
            "guesses": [g.to_dict() if g else None for g in self.guesses],
            "score": self.score,
            "awarded_points": list(self.awarded_points),
            "base_points_remaining": list(self.base_points_remaining),
            "started": self.started,
        }

    @classmethod
    def from_record(
        cls, record: dict | None, date: str, slot_count: int,
    ) -> "SessionState | None":
        """Restore a persisted record, or None if it belongs elsewhere or is malformed."""
        if not isinstance(record, dict):
            return None
        if record.get("v") != RECORD_VERSION or record.get("date") != date:
            return None
        guesses = record.get("guesses")
        awarded = record.get("awarded_points")
        base = record.get("base_points_remaining")
        if not (
            isinstance(guesses, list) and len(guesses) == slot_count
            and isinstance(awarded, list) and len(awarded) == slot_count
            and isinstance(base, list) and len(base) == slot_count
        ):
            return None
        try:
            return cls(
                date=date,
                guesses=[Guess.from_dict(g) if g else None for g in guesses],
                score=int(record.get("score", 0)),
                awarded_points=[int(a) for a in awarded],
                base_points_remaining=[clamp_base_points(int(b)) for b in base],
                started=bool(record.get("started", False)),
            )
        except (KeyError, TypeError, ValueError):
            return None
