"""SQL Result Counter — aggregate "percent of players correct" per level per day.

Invariants:
    - increment is an upsert (attempts += 1, correct += 1 if correct)
    - With a player_session and dedup enabled, only the first report per
      (date, level, player_session) is counted
    - read_percentages always returns LEVEL_COUNT values in 0..100; levels
      without attempts read 0.0
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dailypath.core.domain_types import LEVEL_COUNT
from dailypath.core.errors import StoreUnavailableError
from dailypath.infrastructure.database import dialect_insert
from dailypath.models.result_count import ResultCount, ResultDedup

logger = logging.getLogger(__name__)


def percentage(correct: int, attempts: int) -> float:
    if attempts <= 0:
        return 0.0
    return round(correct / attempts * 100, 1)


class SqlResultCounter:
    """ResultCounter backed by the result_counts and result_dedup tables."""

    def __init__(self, db: AsyncSession, dedup_enabled: bool = True):
        self.db = db
        self.dedup_enabled = dedup_enabled

    async def increment(
        self, date_iso: str, level_index: int, correct: bool,
        player_session: str | None = None,
    ) -> bool:
        """Count one result. Returns False if it was a duplicate report."""
        try:
            if player_session and self.dedup_enabled:
                marker = dialect_insert(self.db, ResultDedup).values(
                    date_iso=date_iso,
                    level_index=level_index,
                    player_session=player_session,
                ).on_conflict_do_nothing()
                result = await self.db.execute(marker)
                if result.rowcount == 0:
                    await self.db.commit()
                    return False

            hit = 1 if correct else 0
            stmt = dialect_insert(self.db, ResultCount).values(
                date_iso=date_iso, level_index=level_index,
                attempts=1, correct=hit,
            ).on_conflict_do_update(
                index_elements=["date_iso", "level_index"],
                set_={
                    "attempts": ResultCount.attempts + 1,
                    "correct": ResultCount.correct + hit,
                },
            )
            await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Result increment failed: {e}",
                extra={"date_iso": date_iso, "level_index": level_index},
            )
            raise StoreUnavailableError(str(e.__class__.__name__), "increment") from e
        return True

    async def read_percentages(self, date_iso: str) -> list[float]:
        try:
            result = await self.db.execute(
                select(
                    ResultCount.level_index, ResultCount.attempts, ResultCount.correct,
                ).where(ResultCount.date_iso == date_iso)
            )
            rows = {r.level_index: r for r in result.all()}
        except SQLAlchemyError as e:
            logger.error(f"Result read failed: {e}", extra={"date_iso": date_iso})
            raise StoreUnavailableError(str(e.__class__.__name__), "read") from e
        return [
            percentage(rows[i].correct, rows[i].attempts) if i in rows else 0.0
            for i in range(LEVEL_COUNT)
        ]
