"""Admin Override — operator writes into a date's override slot.

Invariants:
    - Every successful call ends in exactly one unconditional put_override
    - The committed slot is never read or written here (audit trail of the auto-pick)
    - Keys written are always LEVEL_COUNT codec-normalized PathKeys
    - Unresolvable identities abort before any write, reporting every bad name
"""

import logging

from dailypath.core.catalog import resolve_identity
from dailypath.core.domain_types import PathKey, LEVEL_COUNT
from dailypath.core.errors import InvalidOverrideError, UnresolvedOverrideIdentityError
from dailypath.core.path_key import normalize_path_key
from dailypath.core.picker import pick_daily_keys
from dailypath.core.repository_protocols import CatalogSource, DistributionStore

logger = logging.getLogger(__name__)


class AdminOverrideService:
    """Three ways to produce an override; one way to write it."""

    def __init__(self, store: DistributionStore, catalog: CatalogSource):
        self.store = store
        self.catalog = catalog

    async def recompute_from_catalog(self, date_iso: str) -> list[PathKey]:
        records = await self.catalog.load()
        keys = pick_daily_keys(records, date_iso)
        if len(keys) != LEVEL_COUNT:
            raise InvalidOverrideError(
                f"Could not compute {LEVEL_COUNT} paths for {date_iso} "
                f"(got {len(keys)})",
            )
        return await self._write(date_iso, keys, "catalog")

    async def set_keys(self, date_iso: str, raw_keys: list[str]) -> list[PathKey]:
        if len(raw_keys) != LEVEL_COUNT:
            raise InvalidOverrideError(f"keys must hold exactly {LEVEL_COUNT} path keys")
        keys = [normalize_path_key(k) for k in raw_keys]
        return await self._write(date_iso, keys, "keys")

    async def set_names(self, date_iso: str, names: list[str]) -> list[PathKey]:
        if len(names) != LEVEL_COUNT:
            raise InvalidOverrideError(f"names must hold exactly {LEVEL_COUNT} identities")
        records = await self.catalog.load()
        resolved = [resolve_identity(records, n) for n in names]
        unresolved = [n for n, k in zip(names, resolved) if k is None]
        if unresolved:
            raise UnresolvedOverrideIdentityError(unresolved)
        return await self._write(date_iso, [k for k in resolved if k is not None], "names")

    async def _write(self, date_iso: str, keys: list[PathKey], mode: str) -> list[PathKey]:
        await self.store.put_override(date_iso, keys)
        logger.info(
            f"Override written from {mode}",
            extra={"date_iso": date_iso, "source": "override"},
        )
        return keys
