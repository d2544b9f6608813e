"""SQLAlchemy database sessions and engines for the content and stats stores."""

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from content_desk.config import get_settings


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def enable_sqlite_savepoints(async_engine: AsyncEngine) -> AsyncEngine:
    """Let SQLAlchemy emit BEGIN itself on SQLite so SAVEPOINTs nest correctly.

    The sqlite3 driver otherwise starts transactions lazily and a released
    outermost SAVEPOINT would commit. No-op for other dialects.
    """
    if async_engine.dialect.name != "sqlite":
        return async_engine

    @event.listens_for(async_engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return async_engine


settings = get_settings()

engine = enable_sqlite_savepoints(
    create_async_engine(
        _get_async_url(settings.database_url),
        echo=(settings.app_env == "development" and settings.log_level_sql == "DEBUG"),
        future=True,
    )
)
stats_engine = enable_sqlite_savepoints(
    create_async_engine(
        _get_async_url(settings.stats_database_url),
        future=True,
    )
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
stats_session_factory = async_sessionmaker(
    stats_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — yields an async content-store session per request."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_stats_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency — yields an async stats-store session per request."""
    async with stats_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
