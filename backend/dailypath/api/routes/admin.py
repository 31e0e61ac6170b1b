"""Admin Routes — operator override of a date's puzzles and token check.

Invariants:
    - Every route requires a valid bearer token (401 otherwise, nothing written)
    - An override writes only the override slot; the committed slot is left alone
    - Override date defaults to today in the reference timezone
"""

import logging

from fastapi import APIRouter, Depends

from dailypath.api.dependencies import (
    get_admin_override_service,
    get_today_iso,
    require_admin,
)
from dailypath.schemas.daily import (
    AdminCheckResponse,
    AdminOverrideRequest,
    AdminOverrideResponse,
)
from dailypath.services.admin_override import AdminOverrideService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/admin", tags=["admin"], dependencies=[Depends(require_admin)],
)


@router.post("/override", response_model=AdminOverrideResponse)
async def override_daily_puzzle(
    body: AdminOverrideRequest,
    service: AdminOverrideService = Depends(get_admin_override_service),
    today: str = Depends(get_today_iso),
):
    """Replace a date's puzzles from the catalog, raw keys or identity names."""
    date_iso = body.target_date or today
    if body.from_catalog:
        keys = await service.recompute_from_catalog(date_iso)
    elif body.keys is not None:
        keys = await service.set_keys(date_iso, body.keys)
    else:
        keys = await service.set_names(date_iso, body.names or [])
    return AdminOverrideResponse(date_iso=date_iso, keys=list(keys))


@router.api_route("/check", methods=["GET", "POST"], response_model=AdminCheckResponse)
async def check_admin_token():
    return AdminCheckResponse()
