"""Percentages — per-level success rates, remote first with a local fallback.

Invariants:
    - Always LEVEL_COUNT floats in 0..100, rounded to one decimal
    - The local approximation counts only filled slots in persisted history
"""

import logging

from dailypath.core.domain_types import LEVEL_COUNT
from dailypath.core.errors import ResultServiceError
from dailypath.infrastructure.game_api_client import ResilientGameClient
from dailypath.infrastructure.result_counter import percentage
from dailypath.services.session_storage import SessionStorage

logger = logging.getLogger(__name__)


def local_percentages(storage: SessionStorage, slot_count: int = LEVEL_COUNT) -> list[float]:
    """Success rate per level across every day this device has played."""
    attempts = [0] * slot_count
    correct = [0] * slot_count
    for date_iso in storage.stored_dates():
        state = storage.load_day(date_iso, slot_count)
        if state is None:
            continue
        for i, guess in enumerate(state.guesses):
            if guess is None:
                continue
            attempts[i] += 1
            if guess.correct:
                correct[i] += 1
    return [percentage(c, a) for c, a in zip(correct, attempts)]


async def resolve_percentages(
    client: ResilientGameClient, storage: SessionStorage, date_iso: str,
) -> list[float]:
    try:
        return await client.fetch_percentages(date_iso)
    except ResultServiceError as e:
        logger.warning(
            f"Falling back to local percentages: {e.message}",
            extra={"date_iso": date_iso},
        )
        return local_percentages(storage)
