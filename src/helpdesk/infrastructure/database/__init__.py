"""
Database Infrastructure
=======================

Async SQLAlchemy engine and sessions for the ``database`` store backend.

PostgreSQL goes through asyncpg; SQLite files (local runs, tests) go through
aiosqlite. The engine is process-wide: ``init_database()`` at start-up,
``close_database()`` at shutdown, ``get_session_context()`` in between.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase

from helpdesk.config import settings


class Base(DeclarativeBase):
    """Declarative base shared by the requests and assistant models."""


# Wrapped by the store adapters; OSError covers refused connections
DATABASE_ERRORS = (SQLAlchemyError, OSError, RuntimeError)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """The engine created by ``init_database()``; RuntimeError before that."""
    if _engine is None:
        raise RuntimeError("Database engine not initialized; call init_database() first")
    return _engine


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.debug}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return options


def init_database(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the engine and session factory.

    Args:
        database_url: Overrides ``settings.database_url`` (used by tests)
    """
    global _engine, _session_factory

    url = database_url or settings.database_url
    if url.startswith("postgresql+asyncpg"):
        # asyncpg names the libpq ``sslmode`` parameter ``ssl``
        url = url.replace("sslmode=", "ssl=")

    _engine = create_async_engine(url, **_engine_options(url))
    _session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    return _engine


async def close_database() -> None:
    """Dispose of pooled connections; safe to call when never initialized."""
    global _engine, _session_factory

    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    One unit of work: commit when the block exits cleanly, roll back otherwise.

    Usage:
        async with get_session_context() as session:
            result = await session.execute(select(RequestModel))
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized; call init_database() first")

    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables() -> None:
    """Create any missing tables (local runs and tests; no migrations)."""
    # Importing the model modules registers their tables on Base.metadata
    import helpdesk.requests.infrastructure.models  # noqa: F401
    import helpdesk.assistant.infrastructure.models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
