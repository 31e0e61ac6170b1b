"""Game Session — single-player state machine for one date's five puzzles.

States: NOT_STARTED → LEVEL_ACTIVE(i) → LEVEL_FEEDBACK(i) → LEVEL_ACTIVE(next) | COMPLETE

Invariants:
    - At most one countdown (start delay + recurring tick) is alive, owned by
      the active level; it is cancelled when a guess is accepted, the active
      level changes, the game completes or the session closes
    - A filled slot is never re-scored: a second guess or skip is a no-op
    - awarded = base_points_remaining[i] * (i + 1) for a correct guess, else 0
    - Completion waits for the pending reveal hold; on_complete fires exactly once
    - No evaluation without a loaded catalog: CatalogUnavailableError, nothing written
    - State is persisted after every mutation, countdown ticks included
    - A session restored already complete enters COMPLETE without firing on_complete
    - A started, unfinished day resumes at its first open level as soon as a
      catalog is available; start() is then a no-op
    - A failing result_sink is logged; the answer, hold and phase still stand

Design Decisions:
    - Scheduler injected: asyncio loop timers in production, a manual clock in tests
    - Catalog attached after construction: the puzzle keys arrive first and the
      catalog loads asynchronously, gameplay stays disabled until it lands
    - result_sink is a plain callback so reporting stays fire-and-forget
"""

import logging
from collections.abc import Callable, Sequence

from dailypath.core.catalog import (
    CandidateRecord,
    answers_for_key,
    is_correct_guess,
    suggest_identities,
)
from dailypath.core.domain_types import (
    COUNTDOWN_START_DELAY,
    DEFAULT_SHARE_TITLE,
    FINAL_REVEAL_HOLD,
    REVEAL_HOLD,
    SKIPPED_GUESS_TEXT,
    TICK_SECONDS,
    GamePhase,
    PathKey,
)
from dailypath.core.errors import CatalogUnavailableError, SessionStateError
from dailypath.core.repository_protocols import Scheduler, TimerHandle
from dailypath.core.session_state import Guess, SessionState, award_points
from dailypath.core.share import build_share_text
from dailypath.services.session_storage import SessionStorage

logger = logging.getLogger(__name__)

ResultSink = Callable[[str, int, bool], None]


class LevelTimer:
    """Countdown for one level: wait COUNTDOWN_START_DELAY, then tick every TICK_SECONDS."""

    def __init__(
        self, scheduler: Scheduler, level_index: int, on_tick: Callable[[int], bool],
    ):
        self.scheduler = scheduler
        self.level_index = level_index
        self._on_tick = on_tick
        self._handle: TimerHandle | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True
        self._handle = self.scheduler.call_later(COUNTDOWN_START_DELAY, self._schedule_tick)

    def _schedule_tick(self) -> None:
        if self._running:
            self._handle = self.scheduler.call_later(TICK_SECONDS, self._tick)

    def _tick(self) -> None:
        if not self._running:
            return
        self._handle = None
        # on_tick returns False once the pool is exhausted
        if self._on_tick(self.level_index):
            self._schedule_tick()
        else:
            self._running = False

    def cancel(self) -> None:
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class GameSession:
    """One device's play-through of one date."""

    def __init__(
        self,
        date_iso: str,
        keys: Sequence[PathKey],
        storage: SessionStorage,
        scheduler: Scheduler,
        catalog: list[CandidateRecord] | None = None,
        on_complete: Callable[["GameSession"], None] | None = None,
        result_sink: ResultSink | None = None,
        game_number: int | None = None,
        share_title: str = DEFAULT_SHARE_TITLE,
        site_url: str | None = None,
    ):
        if not keys:
            raise SessionStateError("a game needs at least one puzzle")
        self.date_iso = date_iso
        self.keys: tuple[PathKey, ...] = tuple(keys)
        self.game_number = game_number
        self.storage = storage
        self.scheduler = scheduler
        self.catalog = catalog
        self.on_complete = on_complete
        self.result_sink = result_sink
        self.share_title = share_title
        self.site_url = site_url

        restored = storage.load_day(date_iso, len(self.keys))
        self.state = restored or SessionState.fresh(date_iso, len(self.keys))
        self.was_started = (
            self.state.started
            or self.state.any_slot_filled
            or storage.is_started(date_iso)
        )

        self._timer: LevelTimer | None = None
        self._hold: TimerHandle | None = None
        self._completion_fired = False
        self._active_level: int | None = None

        if self.state.all_slots_filled:
            # re-entered read-only; the completion callback belongs to the original run
            self._phase = GamePhase.COMPLETE
            self._completion_fired = True
            self._active_level = self.state.slot_count - 1
        else:
            self._phase = GamePhase.NOT_STARTED
            if self.was_started and self.catalog is not None:
                self._begin()

    # ─── Read-only view ───────────────────────────────────────────

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def active_level(self) -> int | None:
        return self._active_level

    @property
    def is_complete(self) -> bool:
        return self._phase == GamePhase.COMPLETE

    @property
    def gameplay_enabled(self) -> bool:
        return self.catalog is not None and not self.is_complete

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def countdown_running(self) -> bool:
        return self._timer is not None and self._timer.running

    def answers_for(self, level_index: int) -> list[str]:
        """Every identity that solves a level. Revealed only once the game is over."""
        if not self.is_complete:
            raise SessionStateError("answers are revealed only after the game is complete")
        catalog = self._require_catalog()
        return answers_for_key(catalog, self.keys[level_index])

    def suggestions(self, typed: str) -> list[str]:
        return suggest_identities(self._require_catalog(), typed)

    def share_text(self, title: str | None = None, site_url: str | None = None) -> str:
        return build_share_text(
            title or self.share_title, self.date_iso, self.state.guesses, self.state.score,
            game_number=self.game_number, site_url=site_url or self.site_url,
        )

    # ─── Transitions ──────────────────────────────────────────────

    def attach_catalog(self, records: list[CandidateRecord]) -> None:
        self.catalog = records
        logger.info(
            f"Catalog attached ({len(records)} records); gameplay enabled",
            extra={"date_iso": self.date_iso},
        )
        if self._phase == GamePhase.NOT_STARTED and self.was_started:
            self._begin()

    def start(self) -> None:
        """Leave NOT_STARTED and activate the first open level (resume-aware)."""
        if self._phase != GamePhase.NOT_STARTED:
            return
        self._require_catalog()
        self._begin()

    def _begin(self) -> None:
        self.state.started = True
        self.storage.set_started(self.date_iso)
        self._persist()
        first_open = self.state.first_open_level
        if first_open is None:
            self._enter_complete()
            return
        self._activate(first_open)

    def guess(self, level_index: int, text: str) -> Guess | None:
        """Evaluate a guess for the active level. Returns None if the slot was already filled."""
        if self._slot_filled(level_index):
            return None
        catalog = self._require_catalog()
        self._require_active(level_index)
        correct = is_correct_guess(catalog, text, self.keys[level_index])
        awarded = (
            award_points(self.state.base_points_remaining[level_index], level_index)
            if correct else 0
        )
        return self._answer(level_index, Guess(text=text, correct=correct), awarded)

    def skip(self, level_index: int) -> Guess | None:
        if self._slot_filled(level_index):
            return None
        self._require_active(level_index)
        return self._answer(level_index, Guess(text=SKIPPED_GUESS_TEXT, correct=False), 0)

    def close(self) -> None:
        """Release every pending timer. Persisted state is left as is."""
        self._cancel_countdown()
        if self._hold is not None:
            self._hold.cancel()
            self._hold = None

    # ─── Internals ────────────────────────────────────────────────

    def _require_catalog(self) -> list[CandidateRecord]:
        if self.catalog is None:
            raise CatalogUnavailableError("catalog not loaded; gameplay disabled")
        return self.catalog

    def _slot_filled(self, level_index: int) -> bool:
        if not 0 <= level_index < self.state.slot_count:
            raise SessionStateError(f"level {level_index} does not exist")
        return self.state.guesses[level_index] is not None

    def _require_active(self, level_index: int) -> None:
        if self._phase != GamePhase.LEVEL_ACTIVE or self._active_level != level_index:
            raise SessionStateError(
                f"level {level_index} is not accepting answers (phase {self._phase.value})",
            )

    def _persist(self) -> None:
        self.storage.save_day(self.state)

    def _activate(self, level_index: int) -> None:
        self._cancel_countdown()
        self._phase = GamePhase.LEVEL_ACTIVE
        self._active_level = level_index
        self._timer = LevelTimer(self.scheduler, level_index, self._on_tick)
        self._timer.start()

    def _cancel_countdown(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_tick(self, level_index: int) -> bool:
        if (
            self._phase != GamePhase.LEVEL_ACTIVE
            or self._active_level != level_index
            or self.state.guesses[level_index] is not None
        ):
            return False
        if not self.state.decrement_base_points(level_index):
            return False
        self._persist()
        return self.state.base_points_remaining[level_index] > 0

    def _answer(self, level_index: int, guess: Guess, awarded: int) -> Guess:
        self._cancel_countdown()
        self.state.record_answer(level_index, guess, awarded)
        self._persist()
        logger.info(
            f"Level answered: correct={guess.correct} awarded={awarded}",
            extra={"date_iso": self.date_iso, "level_index": level_index},
        )
        self._phase = GamePhase.LEVEL_FEEDBACK
        final = self.state.all_slots_filled
        hold = FINAL_REVEAL_HOLD if final else REVEAL_HOLD
        self._hold = self.scheduler.call_later(
            hold, lambda: self._end_hold(level_index),
        )
        self._report(level_index, guess.correct)
        return guess

    def _report(self, level_index: int, correct: bool) -> None:
        if self.result_sink is None:
            return
        try:
            self.result_sink(self.date_iso, level_index, correct)
        except Exception as e:
            logger.warning(
                f"Result report failed: {e.__class__.__name__}: {e}",
                extra={"date_iso": self.date_iso, "level_index": level_index},
            )

    def _end_hold(self, level_index: int) -> None:
        self._hold = None
        if self.state.all_slots_filled:
            self._enter_complete()
            return
        next_level = self.state.next_open_level(level_index)
        if next_level is None:
            next_level = self.state.first_open_level
        self._activate(next_level)

    def _enter_complete(self) -> None:
        # gate: every slot filled and no reveal hold outstanding
        if self._hold is not None or not self.state.all_slots_filled:
            return
        self._cancel_countdown()
        self._phase = GamePhase.COMPLETE
        if self._completion_fired:
            return
        self._completion_fired = True
        logger.info(
            f"Game complete with score {self.state.score}",
            extra={"date_iso": self.date_iso},
        )
        if self.on_complete is not None:
            self.on_complete(self)
