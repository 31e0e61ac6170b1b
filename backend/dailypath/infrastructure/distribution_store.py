"""SQL Distribution Store — per-day override/committed slots and the baseline date.

Invariants:
    - commit_if_absent and set_baseline_if_absent are single INSERT ... ON CONFLICT
      DO NOTHING statements; the stored value is re-read after the write, so a
      caller that lost the race returns the winner's value
    - put_override is an unconditional upsert on the override slot only
    - Any SQLAlchemy failure is surfaced as StoreUnavailableError, never swallowed

Design Decisions:
    - Relational table over a dedicated key-value server: the primary key
      conflict gives the atomic set-if-absent primitive across processes
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dailypath.core.domain_types import PathKey, StoreSlot
from dailypath.core.errors import StoreUnavailableError
from dailypath.infrastructure.database import dialect_insert
from dailypath.models.daily_keys import DailyKeys
from dailypath.models.game_baseline import GameBaseline, BASELINE_START_DATE

logger = logging.getLogger(__name__)


class SqlDistributionStore:
    """DistributionStore backed by the daily_keys and game_baseline tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Distribution store {operation} failed: {e}")
            raise StoreUnavailableError(str(e.__class__.__name__), operation) from e

    async def _read_slot(self, date_iso: str, slot: StoreSlot) -> list[PathKey] | None:
        async with self._guard("read"):
            result = await self.db.execute(
                select(DailyKeys.path_keys)
                .where(DailyKeys.date_iso == date_iso)
                .where(DailyKeys.slot == slot.value)
            )
            stored = result.scalar_one_or_none()
        if stored is None:
            return None
        return [PathKey(k) for k in stored]

    async def get_override(self, date_iso: str) -> list[PathKey] | None:
        return await self._read_slot(date_iso, StoreSlot.OVERRIDE)

    async def get_committed(self, date_iso: str) -> list[PathKey] | None:
        return await self._read_slot(date_iso, StoreSlot.COMMITTED)

    async def commit_if_absent(
        self, date_iso: str, keys: list[PathKey],
    ) -> tuple[list[PathKey], bool]:
        async with self._guard("commit"):
            stmt = dialect_insert(self.db, DailyKeys).values(
                date_iso=date_iso,
                slot=StoreSlot.COMMITTED.value,
                path_keys=list(keys),
            ).on_conflict_do_nothing(index_elements=["date_iso", "slot"])
            result = await self.db.execute(stmt)
            await self.db.commit()
        won = result.rowcount == 1
        stored = await self.get_committed(date_iso)
        if stored is None:
            raise StoreUnavailableError("committed row missing after write", "commit")
        return stored, won

    async def put_override(self, date_iso: str, keys: list[PathKey]) -> None:
        async with self._guard("override"):
            stmt = dialect_insert(self.db, DailyKeys).values(
                date_iso=date_iso,
                slot=StoreSlot.OVERRIDE.value,
                path_keys=list(keys),
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["date_iso", "slot"],
                set_={
                    "path_keys": stmt.excluded.path_keys,
                    "updated_at": datetime.now(timezone.utc),
                },
            )
            await self.db.execute(stmt)
            await self.db.commit()

    async def get_baseline(self) -> str | None:
        async with self._guard("read"):
            result = await self.db.execute(
                select(GameBaseline.value)
                .where(GameBaseline.name == BASELINE_START_DATE)
            )
            return result.scalar_one_or_none()

    async def set_baseline_if_absent(self, date_iso: str) -> str:
        async with self._guard("baseline"):
            stmt = dialect_insert(self.db, GameBaseline).values(
                name=BASELINE_START_DATE, value=date_iso,
            ).on_conflict_do_nothing(index_elements=["name"])
            await self.db.execute(stmt)
            await self.db.commit()
        stored = await self.get_baseline()
        if stored is None:
            raise StoreUnavailableError("baseline row missing after write", "baseline")
        return stored
