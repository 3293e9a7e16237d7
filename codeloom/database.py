"""
Codeloom Backend - Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine, provides a session dependency that commits
       on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    Server databases (PostgreSQL via asyncpg) get a sized pool with
    pre-ping and hourly recycling. SQLite (aiosqlite, used by the test
    suite and quick local runs) keeps SQLAlchemy's default pool, which
    does not accept sizing arguments.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from codeloom.config import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Builds create_async_engine kwargs for the given URL's backend."""
    # Why echo only at DEBUG: SQL text can carry PHI in bound literals
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    # Why no pool args for SQLite: the pool classes SQLAlchemy picks for
    # aiosqlite do not accept pool_size or max_overflow
    if make_url(database_url).get_backend_name() == "sqlite":
        return options
    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        # Why recycle: load balancers and PgBouncer drop idle connections
        pool_recycle=3600,
    )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options(settings.database_url))

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, outside
# the session context
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which Alembic reads for
    autogenerated migrations.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/practices/{practice_id}")
        async def get_practice(practice_id: str, db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Any database exception is propagated to the global error handler.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called from the lifespan shutdown."""
    await engine.dispose()
