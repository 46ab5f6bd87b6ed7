# habitboard/database/session.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from habitboard.database.base import Base


def _apply_sqlite_pragmas(dbapi_connection, *, in_memory: bool) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    if not in_memory:
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
    cursor.execute("PRAGMA busy_timeout=5000;")  # 5s
    cursor.close()


class Database:
    """
    Async engine + session factory for the users/habits store.

    SQLite (aiosqlite) is the default backend. An in-memory URL shares a
    single connection so every session sees the same tables.
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        is_sqlite = database_url.startswith("sqlite")
        in_memory = is_sqlite and ":memory:" in database_url

        engine_kwargs: dict[str, Any] = {"echo": False}
        if in_memory:
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True
        if is_sqlite:
            engine_kwargs["connect_args"] = {"timeout": 30}

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)

        if is_sqlite:
            @event.listens_for(self.engine.sync_engine, "connect")
            def _on_connect(dbapi_connection, _connection_record) -> None:  # type: ignore[no-redef]
                _apply_sqlite_pragmas(dbapi_connection, in_memory=in_memory)

        self.SessionLocal = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
            class_=AsyncSession,
        )

    async def init_models(self) -> None:
        # registers users/habits tables on Base.metadata
        import habitboard.database.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self, *, commit: bool = False) -> AsyncIterator[AsyncSession]:
        """
        Yields a session. With commit=True the session is committed on a clean
        exit and rolled back when the body raises.
        """
        async with self.SessionLocal() as s:
            if not commit:
                yield s
                return
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise
