"""Fixtures for end-to-end store tests on in-memory SQLite (aiosqlite)."""

import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tsm.adapters.persistence.database import Base
from tsm.adapters.persistence import models  # noqa: F401  registers tables on Base.metadata
from tsm.infrastructure.stores import get_assignment_store, get_scheduler_store

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    # StaticPool: every session shares the one in-memory database.
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def assignment_store(session):
    return get_assignment_store(session)


@pytest_asyncio.fixture
async def scheduler_store(session):
    return get_scheduler_store(session)
