"""Service test fixtures — async DB, fake stores, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, get_catalog_source and get_today_iso overridden on the app
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection,
      and the sqlite dialect supports the same ON CONFLICT clauses as Postgres
    - "Today" pinned to TODAY so the past/today/future branches are deterministic
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from dailypath.api.dependencies import get_today_iso
from dailypath.db.base import Base
from dailypath.infrastructure.catalog_provider import get_catalog_source
from dailypath.infrastructure.database import get_db, DatabaseSessionManager
import dailypath.infrastructure.database as db_module
import dailypath.models  # noqa: F401
from dailypath.main import app
from dailypath.services.session_storage import SessionStorage
from dailypath.infrastructure.scoped_storage import InMemoryScopedStorage

from tests.services.fake_stores import (
    TODAY,
    FakeCatalogSource,
    FakeScheduler,
    InMemoryDistributionStore,
    five_level_catalog,
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def catalog_records():
    return five_level_catalog()


@pytest.fixture
def fake_catalog(catalog_records):
    return FakeCatalogSource(catalog_records)


@pytest.fixture
def memory_store():
    return InMemoryDistributionStore()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def session_storage():
    return SessionStorage(InMemoryScopedStorage())


@pytest.fixture
async def client(test_engine, test_session_factory, fake_catalog):
    """FastAPI test client with DB, catalog and clock dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_source] = lambda: fake_catalog
    app.dependency_overrides[get_today_iso] = lambda: TODAY

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
