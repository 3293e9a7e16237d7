"""
Codeloom Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the whole test suite.

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock session for pure service unit tests
    ├── db_engine / db_session: in-memory SQLite with the real schema
    ├── sample_practice: a Practice row persisted in db_session
    ├── reset_metrics: zeroes the in-memory request counters (autouse)
    ├── test_client: HTTPX AsyncClient bound to the app, using db_engine
    └── error_tolerant_client: same, but app errors come back as responses
"""

import os
import tempfile

# Settings are read at import time, so the environment is set before any
# codeloom import
_TEST_DIR = tempfile.mkdtemp(prefix="codeloom_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/codeloom_test.db"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["APP_ENV"] = "pilot"
os.environ["APP_VERSION"] = "1.2.3-test"

from contextlib import asynccontextmanager  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock, patch  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from codeloom.database import Base, get_db_session  # noqa: E402
from codeloom.middleware.metrics import metrics  # noqa: E402
from codeloom.models.practice import Practice  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = practice
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_practice_data():
    now = datetime.now(timezone.utc)
    return {
        "id": str(uuid4()),
        "name": "Codeloom Test Practice",
        "plan_key": "plan_a",
        "plan_since": now,
        "created_at": now,
    }


@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory SQLite database with every table created.

    StaticPool keeps the single in-memory connection alive for the whole test.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def sample_practice(db_session, sample_practice_data):
    practice = Practice(**sample_practice_data)
    db_session.add(practice)
    await db_session.commit()
    return practice


@asynccontextmanager
async def _app_client(db_engine, raise_app_exceptions: bool = True):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden to use the test's in-memory database with
    the same commit/rollback behavior as production, and the health probes
    check the same engine.
    """
    from codeloom.main import app

    factory = async_sessionmaker(db_engine, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
    try:
        with patch("codeloom.database.engine", db_engine):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(db_engine):
    async with _app_client(db_engine) as client:
        yield client


@pytest_asyncio.fixture
async def error_tolerant_client(db_engine):
    """Like test_client, but a 500 from the app is returned instead of raised."""
    async with _app_client(db_engine, raise_app_exceptions=False) as client:
        yield client
