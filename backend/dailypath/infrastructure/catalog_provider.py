"""Catalog Provider — loads the candidate CSV from disk for the server.

Invariants:
    - Records are re-parsed only when the file's mtime changes, so callers
      always see the current catalog without re-reading on every request
    - Read failures surface as CatalogUnavailableError (transient)
    - File IO runs in a worker thread; the event loop never blocks on disk
"""

import asyncio
import logging
from pathlib import Path

from dailypath.core.catalog import CandidateRecord, parse_catalog
from dailypath.core.errors import CatalogUnavailableError

logger = logging.getLogger(__name__)


class FileCatalogSource:
    """CatalogSource reading a CSV file, cached by modification time."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._records: list[CandidateRecord] | None = None
        self._mtime: float | None = None
        self._lock = asyncio.Lock()

    def _read(self) -> tuple[float, str]:
        mtime = self.path.stat().st_mtime
        return mtime, self.path.read_text(encoding="utf-8-sig")

    async def load(self) -> list[CandidateRecord]:
        async with self._lock:
            try:
                mtime = (await asyncio.to_thread(self.path.stat)).st_mtime
                if self._records is not None and mtime == self._mtime:
                    return self._records
                mtime, text = await asyncio.to_thread(self._read)
            except OSError as e:
                logger.error(f"Catalog read failed for {self.path}: {e}")
                raise CatalogUnavailableError(f"cannot read {self.path.name}") from e
            self._records = parse_catalog(text)
            self._mtime = mtime
            logger.info(f"Catalog loaded: {len(self._records)} records from {self.path}")
            return self._records


# Singleton (initialized on startup)
catalog_source: FileCatalogSource | None = None


def init_catalog(path: str | Path) -> FileCatalogSource:
    global catalog_source
    catalog_source = FileCatalogSource(path)
    return catalog_source


def get_catalog_source() -> FileCatalogSource:
    """FastAPI dependency for the catalog source."""
    if not catalog_source:
        raise CatalogUnavailableError("catalog not initialized")
    return catalog_source
