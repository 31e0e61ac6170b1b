"""Resilient Game API Client — httpx wrapper used by players' game sessions.

Invariants:
    - Transient failures (connection errors, 5xx): up to max_retries retries
      with exponential backoff and ±25% jitter
    - Client errors (4xx): immediate failure, no retry
    - 409 on /daily maps to UncommittedPastGameError; catalog failures map to
      CatalogUnavailableError; everything else maps to ResultServiceError
    - report_result is fire-and-forget: failures are logged, never raised

Design Decisions:
    - Wrapper over raw httpx client: retry policy isolated from game logic
    - transport injectable: tests drive the client with httpx.MockTransport or
      the ASGI app itself
"""

import asyncio
import logging
import random

import httpx

from dailypath.core.catalog import CandidateRecord
from dailypath.core.domain_types import PathKey, PuzzleSource
from dailypath.core.errors import (
    CatalogUnavailableError,
    ResultServiceError,
    UncommittedPastGameError,
)
from dailypath.core.puzzle_set import DailyPuzzleSet

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class ResilientGameClient:
    """Talks to the daily puzzle API with retry and error mapping."""

    def __init__(
        self,
        base_url: str,
        max_retries: int = 3,
        base_delay_ms: int = 250,
        max_delay_ms: int = 4_000,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def __aenter__(self) -> "ResilientGameClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send with retry on transient failures. 4xx responses are returned as-is."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(method, API_PREFIX + path, **kwargs)
            except httpx.TransportError as e:
                await self._handle_transient(f"{e.__class__.__name__}: {e}", attempt)
                continue
            if response.status_code >= 500:
                await self._handle_transient(f"HTTP {response.status_code}", attempt)
                continue
            if attempt:
                logger.info(f"{method} {path} succeeded after retry", extra={"attempt": attempt})
            return response
        raise ResultServiceError(f"{method} {path} exhausted retries")

    async def _handle_transient(self, reason: str, attempt: int) -> None:
        if attempt >= self.max_retries:
            raise ResultServiceError(
                f"Transient failure after {self.max_retries} retries: {reason}",
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"Transient game API error, retrying in {delay}ms: {reason}",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    async def fetch_daily(self, date_iso: str) -> DailyPuzzleSet:
        response = await self._request("GET", "/daily", params={"date": date_iso})
        if response.status_code == 409:
            raise UncommittedPastGameError(date_iso)
        if response.status_code != 200:
            raise ResultServiceError(
                f"daily puzzle request failed for {date_iso}", response.status_code,
            )
        body = response.json()
        return DailyPuzzleSet(
            date_iso=body["dateISO"],
            game_number=body.get("gameNumber"),
            keys=tuple(PathKey(k) for k in body["keys"]),
            source=PuzzleSource(body["source"]),
            base_iso=body.get("baseISO"),
        )

    async def fetch_catalog(self) -> list[CandidateRecord]:
        try:
            response = await self._request("GET", "/catalog")
        except ResultServiceError as e:
            raise CatalogUnavailableError(e.message) from e
        if response.status_code != 200:
            raise CatalogUnavailableError(f"HTTP {response.status_code}")
        return [CandidateRecord.from_dict(r) for r in response.json()["records"]]

    async def report_result(
        self, date_iso: str, level_index: int, correct: bool,
        player_session: str | None = None,
    ) -> None:
        payload = {"date": date_iso, "levelIndex": level_index, "correct": correct}
        if player_session:
            payload["playerSession"] = player_session
        try:
            response = await self._request("POST", "/results", json=payload)
        except ResultServiceError as e:
            logger.warning(
                f"Result report dropped: {e.message}",
                extra={"date_iso": date_iso, "level_index": level_index},
            )
            return
        if response.status_code >= 400:
            logger.warning(
                f"Result report rejected with HTTP {response.status_code}",
                extra={"date_iso": date_iso, "level_index": level_index},
            )

    async def fetch_percentages(self, date_iso: str) -> list[float]:
        response = await self._request(
            "GET", "/results/percentages", params={"date": date_iso},
        )
        if response.status_code != 200:
            raise ResultServiceError(
                f"percentages request failed for {date_iso}", response.status_code,
            )
        return [float(v) for v in response.json()]


class HttpCatalogSource:
    """CatalogSource fetching the catalog once through the game API."""

    def __init__(self, client: ResilientGameClient):
        self.client = client
        self._records: list[CandidateRecord] | None = None

    async def load(self) -> list[CandidateRecord]:
        if self._records is None:
            self._records = await self.client.fetch_catalog()
        return self._records
