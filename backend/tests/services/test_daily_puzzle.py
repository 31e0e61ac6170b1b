"""Daily Puzzle Service — resolution order, idempotent commit, past immutability.

Invariants:
    - Override (5 keys) beats committed; committed beats recomputation
    - Today's first visit commits; every later or concurrent visit sees that commit
    - Past dates with nothing stored raise UncommittedPastGameError, never recompute
    - Future dates are previews and are never written
"""

import asyncio

import pytest

from dailypath.core.domain_types import PuzzleSource
from dailypath.core.errors import (
    CatalogUnavailableError,
    StoreUnavailableError,
    UncommittedPastGameError,
)
from dailypath.core.picker import pick_daily_keys
from dailypath.services.daily_puzzle import DailyPuzzleService

from tests.services.fake_stores import (
    FakeCatalogSource,
    InMemoryDistributionStore,
    record,
)

TODAY = "2025-09-03"
OVERRIDE_KEYS = ["o1", "o2", "o3", "o4", "o5"]


def _other_catalog():
    return [record(f"X{lvl}", [f"Other{lvl}"], lvl) for lvl in range(1, 6)]


@pytest.fixture
def service(memory_store, fake_catalog):
    return DailyPuzzleService(memory_store, fake_catalog)


# ─── Today ──────────────────────────────────────────────────────

async def test_first_visit_today_commits_pick(service, memory_store, catalog_records):
    result = await service.resolve(TODAY, TODAY)
    expected = pick_daily_keys(catalog_records, TODAY)
    assert result.source == PuzzleSource.COMMITTED
    assert list(result.keys) == expected
    assert memory_store.committed[TODAY] == expected


async def test_commit_survives_catalog_change(service, fake_catalog):
    first = await service.resolve(TODAY, TODAY)
    fake_catalog.records = _other_catalog()
    second = await service.resolve(TODAY, TODAY)
    assert second.keys == first.keys
    assert second.source == PuzzleSource.COMMITTED


async def test_concurrent_first_visits_agree(memory_store, catalog_records):
    # half the callers see an updated catalog mid-race
    services = [
        DailyPuzzleService(
            memory_store,
            FakeCatalogSource(catalog_records if i % 2 else _other_catalog()),
        )
        for i in range(20)
    ]
    results = await asyncio.gather(*(s.resolve(TODAY, TODAY) for s in services))
    stored = memory_store.committed[TODAY]
    assert all(list(r.keys) == stored for r in results)
    assert all(r.source == PuzzleSource.COMMITTED for r in results)
    assert memory_store.commit_attempts >= 2


async def test_degraded_catalog_commits_fewer_keys(memory_store, catalog_records):
    partial = [r for r in catalog_records if r.level != 5]
    service = DailyPuzzleService(memory_store, FakeCatalogSource(partial))
    result = await service.resolve(TODAY, TODAY)
    assert len(result.keys) == 4
    assert memory_store.committed[TODAY] == list(result.keys)


async def test_empty_catalog_is_unavailable(memory_store):
    service = DailyPuzzleService(memory_store, FakeCatalogSource([]))
    with pytest.raises(CatalogUnavailableError):
        await service.resolve(TODAY, TODAY)
    assert TODAY not in memory_store.committed


async def test_catalog_failure_propagates(memory_store):
    service = DailyPuzzleService(memory_store, FakeCatalogSource(fail=True))
    with pytest.raises(CatalogUnavailableError):
        await service.resolve(TODAY, TODAY)
    assert memory_store.committed == {}


# ─── Overrides ──────────────────────────────────────────────────

async def test_override_beats_commit(service, memory_store):
    committed = await service.resolve(TODAY, TODAY)
    memory_store.override[TODAY] = list(OVERRIDE_KEYS)
    result = await service.resolve(TODAY, TODAY)
    assert result.source == PuzzleSource.OVERRIDE
    assert list(result.keys) == OVERRIDE_KEYS
    assert memory_store.committed[TODAY] == list(committed.keys)


async def test_override_restores_past_date(service, memory_store, fake_catalog):
    memory_store.override["2025-09-01"] = list(OVERRIDE_KEYS)
    result = await service.resolve("2025-09-01", TODAY)
    assert result.source == PuzzleSource.OVERRIDE
    assert fake_catalog.loads == 0


async def test_short_override_is_ignored(service, memory_store):
    memory_store.override[TODAY] = ["o1", "o2"]
    result = await service.resolve(TODAY, TODAY)
    assert result.source == PuzzleSource.COMMITTED


# ─── Past and future ────────────────────────────────────────────

async def test_past_date_without_commit_is_rejected(service, memory_store, fake_catalog):
    with pytest.raises(UncommittedPastGameError) as exc:
        await service.resolve("2025-09-02", TODAY)
    assert exc.value.context.date_iso == "2025-09-02"
    assert fake_catalog.loads == 0
    assert "2025-09-02" not in memory_store.committed


async def test_past_committed_date_is_immutable(service, memory_store, fake_catalog):
    memory_store.committed["2025-09-01"] = ["c1", "c2", "c3", "c4", "c5"]
    fake_catalog.records = _other_catalog()
    result = await service.resolve("2025-09-01", TODAY)
    assert result.source == PuzzleSource.COMMITTED
    assert list(result.keys) == ["c1", "c2", "c3", "c4", "c5"]


async def test_future_date_is_preview_and_not_written(service, memory_store, catalog_records):
    result = await service.resolve("2025-09-10", TODAY)
    assert result.source == PuzzleSource.PREVIEW
    assert list(result.keys) == pick_daily_keys(catalog_records, "2025-09-10")
    assert "2025-09-10" not in memory_store.committed


async def test_store_failure_is_not_replaced_by_fresh_pick(fake_catalog):
    class BrokenStore(InMemoryDistributionStore):
        async def get_committed(self, date_iso):
            raise StoreUnavailableError("connection refused", "read")

    store = BrokenStore()
    with pytest.raises(StoreUnavailableError):
        await DailyPuzzleService(store, fake_catalog).resolve(TODAY, TODAY)
    assert store.committed == {}


# ─── Baseline and game numbers ──────────────────────────────────

async def test_first_resolve_sets_baseline_to_today(service, memory_store):
    result = await service.resolve(TODAY, TODAY)
    assert memory_store.baseline == TODAY
    assert result.base_iso == TODAY
    assert result.game_number == 1


async def test_game_number_counts_from_baseline(service, memory_store):
    memory_store.baseline = "2025-09-01"
    result = await service.resolve(TODAY, TODAY)
    assert result.game_number == 3


async def test_baseline_never_moves(service, memory_store):
    await service.resolve(TODAY, TODAY)
    later = await service.resolve("2025-09-05", "2025-09-05")
    assert memory_store.baseline == TODAY
    assert later.game_number == 3


async def test_configured_baseline_seed(memory_store, fake_catalog):
    service = DailyPuzzleService(memory_store, fake_catalog, baseline_seed="2025-08-30")
    result = await service.resolve(TODAY, TODAY)
    assert result.base_iso == "2025-08-30"
    assert result.game_number == 5


async def test_date_before_baseline_has_no_number(service, memory_store):
    memory_store.baseline = TODAY
    memory_store.override["2025-08-01"] = list(OVERRIDE_KEYS)
    result = await service.resolve("2025-08-01", TODAY)
    assert result.game_number is None


async def test_concurrent_baseline_writes_agree(memory_store):
    services = [
        DailyPuzzleService(memory_store, FakeCatalogSource(), baseline_seed=f"2025-09-0{i}")
        for i in range(1, 6)
    ]
    values = await asyncio.gather(*(s.ensure_baseline(TODAY) for s in services))
    assert len(set(values)) == 1
    assert values[0] == memory_store.baseline
