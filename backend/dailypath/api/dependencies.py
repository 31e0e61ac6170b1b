"""API Dependencies — FastAPI providers for auth, calendar and services.

Invariants:
    - require_admin compares tokens in constant time; an empty configured
      token rejects every request
    - get_today_iso is the only place the server reads the clock
    - Services are built per request over the request's DB session
"""

import secrets

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from dailypath.config import get_settings
from dailypath.core.errors import UnauthorizedError
from dailypath.core.game_calendar import today_iso
from dailypath.infrastructure.catalog_provider import FileCatalogSource, get_catalog_source
from dailypath.infrastructure.database import get_db
from dailypath.infrastructure.distribution_store import SqlDistributionStore
from dailypath.infrastructure.result_counter import SqlResultCounter
from dailypath.services.admin_override import AdminOverrideService
from dailypath.services.daily_puzzle import DailyPuzzleService


def get_today_iso() -> str:
    return today_iso(get_settings().time_zone)


def require_admin(authorization: str | None = Header(None)) -> None:
    expected = get_settings().admin_token
    scheme, _, token = (authorization or "").partition(" ")
    if (
        not expected
        or scheme.lower() != "bearer"
        or not secrets.compare_digest(token.strip().encode(), expected.encode())
    ):
        raise UnauthorizedError()


def get_distribution_store(db: AsyncSession = Depends(get_db)) -> SqlDistributionStore:
    return SqlDistributionStore(db)


def get_daily_puzzle_service(
    store: SqlDistributionStore = Depends(get_distribution_store),
    catalog: FileCatalogSource = Depends(get_catalog_source),
) -> DailyPuzzleService:
    return DailyPuzzleService(
        store, catalog, baseline_seed=get_settings().baseline_start_date,
    )


def get_admin_override_service(
    store: SqlDistributionStore = Depends(get_distribution_store),
    catalog: FileCatalogSource = Depends(get_catalog_source),
) -> AdminOverrideService:
    return AdminOverrideService(store, catalog)


def get_result_counter(db: AsyncSession = Depends(get_db)) -> SqlResultCounter:
    return SqlResultCounter(db, dedup_enabled=get_settings().results_dedup_enabled)
