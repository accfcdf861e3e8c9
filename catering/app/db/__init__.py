"""Async engine and session management.

The engine is created lazily from ``Settings.database_url`` so tests can
install their own session factory before the first request.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from config import get_settings

from ..models import Base
from ..obs.queries import add_query_logger

engine: AsyncEngine | None = None
SessionLocal: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(target: AsyncEngine) -> None:
    """Turn on FK enforcement for SQLite connections."""

    if target.dialect.name != "sqlite":
        return

    def _on_connect(dbapi_conn, _record):  # type: ignore[no-untyped-def]
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    event.listen(target.sync_engine, "connect", _on_connect)


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an :class:`AsyncEngine` with query logging attached."""

    created = create_async_engine(url, **kwargs)
    _enable_sqlite_foreign_keys(created)
    add_query_logger(created, "catering")
    return created


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating it on first use."""

    global engine, SessionLocal
    if SessionLocal is None:
        engine = build_engine(get_settings().database_url)
        SessionLocal = async_sessionmaker(
            engine, expire_on_commit=False, class_=AsyncSession
        )
    return SessionLocal


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""

    async with get_sessionmaker()() as session:
        yield session


async def create_schema(target: AsyncEngine | None = None) -> None:
    """Create all tables on ``target`` (defaults to the app engine)."""

    if target is None:
        get_sessionmaker()
        target = engine
    assert target is not None
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose() -> None:
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None


def create_test_session() -> tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Return a session factory and engine for tests.

    The database uses an in-memory SQLite engine with a static pool so that
    every session shares the same data. Call :func:`create_schema` on the
    returned engine before use.
    """

    test_engine = build_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    factory = async_sessionmaker(
        test_engine, expire_on_commit=False, class_=AsyncSession
    )
    return factory, test_engine


__all__ = [
    "SessionLocal",
    "build_engine",
    "create_schema",
    "create_test_session",
    "dispose",
    "engine",
    "get_session",
    "get_sessionmaker",
]
