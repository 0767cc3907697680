"""Database engine for character records.

One async engine per process, built lazily from ``Settings.database_url``.
Stores that are not handed a session factory of their own share it.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from charforge.config import get_settings

from .models import Base

_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def sqlite_file_path(database_url: str) -> Path | None:
    """Return the database file of a SQLite URL, or None for other backends and :memory:."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return None
    return Path(url.database)


def get_engine() -> AsyncEngine:
    """Return the shared engine, creating it and the SQLite file's directory on first use."""
    global _engine

    if _engine is None:
        settings = get_settings()
        db_file = sqlite_file_path(settings.database_url)
        if db_file is not None:
            db_file.parent.mkdir(parents=True, exist_ok=True)

        _engine = create_async_engine(settings.database_url, echo=settings.debug)

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _async_session_factory

    if _async_session_factory is None:
        # Records stay readable after commit; stores return their documents
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )

    return _async_session_factory


@asynccontextmanager
async def get_session(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Open a session that commits when the block exits cleanly.

    An exception inside the block rolls the transaction back and propagates,
    so a failed character write leaves the stored record as it was.

    Args:
        factory: Session factory to use; defaults to the shared engine's

    Example:
        async with get_session() as session:
            record = await session.get(CharacterRecord, character_id)
    """
    factory = factory or get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the ``characters`` table if it does not exist."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the shared engine; the next call to get_engine builds a new one."""
    global _engine, _async_session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
