"""Daily Puzzle Service — the single source of truth for a date's five puzzles.

Invariants:
    - Resolution order: override (exactly LEVEL_COUNT keys) > committed >
      UncommittedPastGame for past dates > commit-on-first-visit for today >
      preview for future dates
    - A past date is never recomputed from the catalog
    - Today's pick is written with commit_if_absent; whatever the store holds
      after the write is returned, so concurrent first visits never diverge
    - Previews are never written
    - The baseline is ensured (first writer wins) before any game number is computed
    - Store errors propagate; nothing is fabricated on failure

Design Decisions:
    - Service takes protocol-typed store and catalog: the same code runs over
      SQL in production and in-memory fakes in tests
    - Catalog loaded lazily: override/committed/past paths never touch it
"""

import logging

from dailypath.core.domain_types import PathKey, PuzzleSource, LEVEL_COUNT
from dailypath.core.errors import CatalogUnavailableError, UncommittedPastGameError
from dailypath.core.game_calendar import game_number
from dailypath.core.picker import pick_daily_keys
from dailypath.core.puzzle_set import DailyPuzzleSet
from dailypath.core.repository_protocols import CatalogSource, DistributionStore

logger = logging.getLogger(__name__)


class DailyPuzzleService:
    """Picker + distribution store under the commit/override protocol."""

    def __init__(
        self,
        store: DistributionStore,
        catalog: CatalogSource,
        baseline_seed: str | None = None,
    ):
        self.store = store
        self.catalog = catalog
        self.baseline_seed = baseline_seed

    async def ensure_baseline(self, today_iso: str) -> str:
        """Read the baseline; if absent, offer one and return whichever value won."""
        existing = await self.store.get_baseline()
        if existing:
            return existing
        offered = self.baseline_seed or today_iso
        stored = await self.store.set_baseline_if_absent(offered)
        if stored != offered:
            logger.info(
                f"Baseline already set to {stored}; offered {offered} discarded",
                extra={"date_iso": stored},
            )
        else:
            logger.info(f"Baseline start date set to {stored}", extra={"date_iso": stored})
        return stored

    async def pick(self, date_iso: str) -> list[PathKey]:
        """Run the picker against the current catalog."""
        records = await self.catalog.load()
        picked = pick_daily_keys(records, date_iso)
        if not picked:
            raise CatalogUnavailableError("no candidates at any level")
        if len(picked) < LEVEL_COUNT:
            logger.warning(
                f"Degraded pick: {len(picked)}/{LEVEL_COUNT} levels have candidates",
                extra={"date_iso": date_iso},
            )
        return picked

    async def resolve(self, date_iso: str, today_iso: str) -> DailyPuzzleSet:
        baseline = await self.ensure_baseline(today_iso)
        number = game_number(date_iso, baseline)

        def _result(keys: list[PathKey], source: PuzzleSource) -> DailyPuzzleSet:
            return DailyPuzzleSet(
                date_iso=date_iso, game_number=number, keys=tuple(keys),
                source=source, base_iso=baseline,
            )

        override = await self.store.get_override(date_iso)
        if override is not None and len(override) == LEVEL_COUNT:
            return _result(override, PuzzleSource.OVERRIDE)

        committed = await self.store.get_committed(date_iso)
        if committed is not None:
            return _result(committed, PuzzleSource.COMMITTED)

        if date_iso < today_iso:
            logger.warning(
                "Past date requested without commit or override",
                extra={"date_iso": date_iso, "error_code": "UNCOMMITTED_PAST_GAME"},
            )
            raise UncommittedPastGameError(date_iso, number)

        picked = await self.pick(date_iso)
        if date_iso == today_iso:
            stored, won = await self.store.commit_if_absent(date_iso, picked)
            if won:
                logger.info("Committed today's puzzles", extra={"date_iso": date_iso})
            else:
                logger.info(
                    "Commit race lost; returning stored puzzles",
                    extra={"date_iso": date_iso},
                )
            return _result(stored, PuzzleSource.COMMITTED)

        return _result(picked, PuzzleSource.PREVIEW)
