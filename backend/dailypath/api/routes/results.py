"""Result Routes — per-level correctness counters.

Invariants:
    - POST is fire-and-forget for clients: 202 whether or not the report was
      counted (duplicates per player session are acknowledged, not counted)
    - GET percentages always returns LEVEL_COUNT floats in 0..100
"""

from fastapi import APIRouter, Depends, Query, status

from dailypath.api.dependencies import get_result_counter, get_today_iso
from dailypath.core.errors import InvalidDateError
from dailypath.core.game_calendar import is_iso_date
from dailypath.infrastructure.result_counter import SqlResultCounter
from dailypath.schemas.daily import ResultCountRequest, ResultCountResponse

router = APIRouter(prefix="/api/v1/results", tags=["results"])


@router.post(
    "", response_model=ResultCountResponse, status_code=status.HTTP_202_ACCEPTED,
)
async def report_result(
    body: ResultCountRequest, counter: SqlResultCounter = Depends(get_result_counter),
):
    counted = await counter.increment(
        body.date, body.level_index, body.correct, body.player_session,
    )
    return ResultCountResponse(counted=counted)


@router.get("/percentages", response_model=list[float])
async def result_percentages(
    date: str | None = Query(None),
    counter: SqlResultCounter = Depends(get_result_counter),
    today: str = Depends(get_today_iso),
):
    if date is not None and not is_iso_date(date):
        raise InvalidDateError(date)
    return await counter.read_percentages(date or today)
