"""
States API Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the test suite.
How:   Tests run against an in-memory SQLite database (aiosqlite + StaticPool)
       so store and service behaviour is exercised for real; a mock session
       covers database failure paths.

Fixtures (all function-scoped):
    ├── catalog:          Catalog built from the bundled snapshot
    ├── db_engine:        Fresh in-memory database with tables created
    ├── db_session:       AsyncSession bound to db_engine
    ├── fact_service:     FactService over catalog + db_session (seeded RNG)
    ├── mock_db_session:  AsyncMock session for failure injection
    └── test_client:      HTTPX AsyncClient wired to a fresh app
"""

import json
import os
import random
from unittest.mock import AsyncMock, MagicMock

# Must be set before states_api.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from states_api.database import Base, dispose_engine, get_db_session
from states_api.models.fact_sheet import FactSheet  # noqa: F401
from states_api.services.catalog import DEFAULT_SNAPSHOT_PATH, Catalog
from states_api.services.fact_service import FactService
from states_api.services.fact_store import FactStore


@pytest.fixture
def catalog() -> Catalog:
    with open(DEFAULT_SNAPSHOT_PATH, encoding="utf-8") as f:
        return Catalog.from_records(json.load(f))


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def fact_service(catalog, db_session) -> FactService:
    return FactService(catalog=catalog, store=FactStore(db_session), rng=random.Random(1234))


@pytest.fixture
def mock_db_session():
    """
    Mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception())
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(catalog, db_engine):
    """
    HTTPX AsyncClient talking to a fresh app over ASGITransport.

    ASGITransport does not run the lifespan, so the catalog is attached to
    app.state here and the session dependency is pointed at db_engine.
    """
    from states_api.main import create_app

    app = create_app()
    app.state.catalog = catalog

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # /health uses the module-level engine directly
    await dispose_engine()
