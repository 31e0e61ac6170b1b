"""Admin Override Service — three modes, one unconditional write."""

import pytest

from dailypath.core.errors import InvalidOverrideError, UnresolvedOverrideIdentityError
from dailypath.core.picker import pick_daily_keys
from dailypath.services.admin_override import AdminOverrideService

from tests.services.fake_stores import FakeCatalogSource

DATE = "2025-09-03"


@pytest.fixture
def admin(memory_store, fake_catalog):
    return AdminOverrideService(memory_store, fake_catalog)


async def test_recompute_from_catalog(admin, memory_store, catalog_records):
    keys = await admin.recompute_from_catalog(DATE)
    assert keys == pick_daily_keys(catalog_records, DATE)
    assert memory_store.override[DATE] == keys


async def test_recompute_with_incomplete_catalog_fails(memory_store, catalog_records):
    partial = [r for r in catalog_records if r.level != 2]
    admin = AdminOverrideService(memory_store, FakeCatalogSource(partial))
    with pytest.raises(InvalidOverrideError):
        await admin.recompute_from_catalog(DATE)
    assert DATE not in memory_store.override


async def test_set_keys_normalizes(admin, memory_store):
    keys = await admin.set_keys(DATE, [" A > B ", "C", "D>E", "F", "G"])
    assert keys == ["A>B", "C", "D>E", "F", "G"]
    assert memory_store.override[DATE] == keys


async def test_set_keys_requires_five(admin, memory_store):
    with pytest.raises(InvalidOverrideError):
        await admin.set_keys(DATE, ["A", "B"])
    assert memory_store.override == {}


async def test_set_names_resolves_through_catalog(admin, memory_store):
    keys = await admin.set_names(
        DATE, ["ada stone", "Cara Lind", "Eve Park", "Gus Moreau", "Ivo Brandt"],
    )
    assert keys == [
        "North U>Harbor FC",
        "West Tech>Lake City",
        "North U>Lake City>Harbor FC",
        "Hill Academy>River Town>Bay United",
        "Hill Academy>Lake City>Bay United>Harbor FC",
    ]
    assert memory_store.override[DATE] == keys


async def test_unresolved_names_are_reported_and_nothing_written(admin, memory_store):
    with pytest.raises(UnresolvedOverrideIdentityError) as exc:
        await admin.set_names(DATE, ["Ada Stone", "Nobody", "Eve Park", "Ghost", "Jo Marsh"])
    assert exc.value.names == ["Nobody", "Ghost"]
    assert memory_store.override == {}


async def test_override_replaces_earlier_override(admin, memory_store):
    await admin.set_keys(DATE, ["A", "B", "C", "D", "E"])
    await admin.set_keys(DATE, ["V", "W", "X", "Y", "Z"])
    assert memory_store.override[DATE] == ["V", "W", "X", "Y", "Z"]


async def test_override_never_touches_committed(admin, memory_store):
    memory_store.committed[DATE] = ["c1", "c2", "c3", "c4", "c5"]
    await admin.set_keys(DATE, ["A", "B", "C", "D", "E"])
    assert memory_store.committed[DATE] == ["c1", "c2", "c3", "c4", "c5"]
