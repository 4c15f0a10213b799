"""
Shared fixtures: a fresh SQLite database per test, a TestClient bound to it,
and a helper to run service coroutines against it.
"""

import asyncio
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Must be set before app.config builds its settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./trees_insects_test.db")

from app.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.seed import seed  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite; NullPool so each event loop opens its own connection."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    enable_sqlite_foreign_keys(test_engine)

    async def create_tables():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    yield test_engine
    asyncio.run(test_engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def run(session_factory):
    """Run `fn(session)` to completion in a fresh session and return its result."""
    def _run(fn):
        async def wrapper():
            async with session_factory() as session:
                return await fn(session)
        return asyncio.run(wrapper())
    return _run


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(run):
    """Starter trees, insects and links."""
    return run(seed)


@pytest.fixture
def tree_payload():
    return {"name": "Hyperion", "location": "Redwood National Park", "height": 380.1, "size": 53.3}


@pytest.fixture
def insect_payload():
    return {
        "name": "Monarch Butterfly",
        "description": "Orange wings with black veins",
        "fact": "Migrates up to 3000 miles",
        "territory": "North America",
        "millimeters": 100,
    }
