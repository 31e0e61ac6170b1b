"""Play Session — wires a GameSession to the game API for one date.

Invariants:
    - The puzzle set is fetched before the session exists; the catalog is
      attached afterwards, so gameplay stays disabled until it has loaded
    - Result reports run as background tasks and never block or fail a guess
"""

import asyncio
import logging
import uuid
from collections.abc import Callable

from dailypath.config import get_settings
from dailypath.core.repository_protocols import Scheduler
from dailypath.infrastructure.game_api_client import HttpCatalogSource, ResilientGameClient
from dailypath.services.game_session import GameSession
from dailypath.services.session_storage import SessionStorage

logger = logging.getLogger(__name__)


class ResultReporter:
    """result_sink that forwards each answered level to the counter endpoint."""

    def __init__(self, client: ResilientGameClient, player_session: str | None = None):
        self.client = client
        self.player_session = player_session or uuid.uuid4().hex
        self._tasks: set[asyncio.Task] = set()

    def __call__(self, date_iso: str, level_index: int, correct: bool) -> None:
        task = asyncio.get_running_loop().create_task(
            self.client.report_result(date_iso, level_index, correct, self.player_session),
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        if self._tasks:
            await asyncio.gather(*self._tasks)


async def open_day_session(
    client: ResilientGameClient,
    storage: SessionStorage,
    scheduler: Scheduler,
    date_iso: str,
    reporter: ResultReporter | None = None,
    on_complete: Callable[[GameSession], None] | None = None,
) -> GameSession:
    """Fetch the day's puzzles, build the session, then load the catalog into it."""
    settings = get_settings()
    puzzle = await client.fetch_daily(date_iso)
    session = GameSession(
        date_iso=puzzle.date_iso,
        keys=puzzle.keys,
        storage=storage,
        scheduler=scheduler,
        on_complete=on_complete,
        result_sink=reporter,
        game_number=puzzle.game_number,
        share_title=settings.game_title,
        site_url=settings.site_url,
    )
    records = await HttpCatalogSource(client).load()
    session.attach_catalog(records)
    return session
