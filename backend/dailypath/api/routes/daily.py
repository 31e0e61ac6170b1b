"""Daily Puzzle Route — GET /api/v1/daily, the public read of a date's puzzles.

Invariants:
    - No date → today in the reference timezone; malformed date → 400
    - Past dates without commit or override → 409 UncommittedPastGame
    - Responses are never cached by intermediaries (a preview can become a commit)
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

from dailypath.api.dependencies import get_daily_puzzle_service, get_today_iso
from dailypath.core.errors import InvalidDateError
from dailypath.core.game_calendar import is_iso_date
from dailypath.schemas.daily import DailyPuzzleResponse
from dailypath.services.daily_puzzle import DailyPuzzleService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/daily", tags=["daily"])


@router.get("", response_model=DailyPuzzleResponse)
async def get_daily_puzzle(
    response: Response,
    date: str | None = Query(None),
    service: DailyPuzzleService = Depends(get_daily_puzzle_service),
    today: str = Depends(get_today_iso),
):
    if date is not None and not is_iso_date(date):
        raise InvalidDateError(date)
    puzzle = await service.resolve(date or today, today)
    response.headers["Cache-Control"] = "no-store"
    return DailyPuzzleResponse(
        date_iso=puzzle.date_iso,
        game_number=puzzle.game_number,
        keys=list(puzzle.keys),
        source=puzzle.source,
        base_iso=puzzle.base_iso,
    )
