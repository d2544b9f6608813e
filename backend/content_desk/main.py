"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from content_desk.config import get_settings
from content_desk.application.services import (
    CommentStatsAggregator,
    CommentStatsScheduler,
    RollupReport,
    drain_notifications,
)
from content_desk.infrastructure.database import Base, StatsBase, engine, stats_engine
from content_desk.infrastructure.database.session import (
    async_session_factory,
    stats_session_factory,
)
from content_desk.infrastructure.database.repositories import (
    SQLAlchemyCommentRepository,
    SQLAlchemyStatRecordRepository,
    SQLAlchemyUserRepository,
)
from content_desk.infrastructure.logging.log_config import setup_logging
from content_desk.presentation.api.error_handlers import register_exception_handlers
from content_desk.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists(database_url: str) -> None:
    """Create a PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    Non-PostgreSQL URLs are left alone.
    """
    if not database_url.startswith("postgresql://"):
        return

    import asyncpg

    db_name = urlparse(database_url).path.lstrip("/")
    if not db_name:
        return

    maintenance_url = database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _run_comment_rollup() -> RollupReport:
    """One rollup run on its own content and stats sessions.

    Used as the CommentStatsScheduler's ``run_once`` so each run has its own
    commit/rollback boundary.
    """
    async with async_session_factory() as session, stats_session_factory() as stats_session:
        aggregator = CommentStatsAggregator(
            users=SQLAlchemyUserRepository(session),
            comments=SQLAlchemyCommentRepository(session),
            stats=SQLAlchemyStatRecordRepository(stats_session),
        )
        try:
            report = await aggregator.run()
            await stats_session.commit()
        except Exception:
            await stats_session.rollback()
            raise
    return report


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables, start the stats scheduler."""
    settings = get_settings()
    setup_logging()

    # 0. Ensure both PostgreSQL databases exist (auto-create if missing)
    await _ensure_database_exists(settings.database_url)
    await _ensure_database_exists(settings.stats_database_url)

    # 1. Create all database tables in both stores
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with stats_engine.begin() as conn:
        await conn.run_sync(StatsBase.metadata.create_all)

    # 2. Ensure upload directory exists
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    # 3. Start the comment stats scheduler
    scheduler = None
    if settings.stats_job_enabled:
        scheduler = CommentStatsScheduler(
            run_once=_run_comment_rollup,
            interval_seconds=settings.stats_job_interval_seconds,
        )
        await scheduler.start()
    else:
        logger.info("Comment stats scheduler disabled")

    yield

    # Shutdown
    if scheduler is not None:
        await scheduler.stop()
    await drain_notifications()
    await engine.dispose()
    await stats_engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Mount API routes and the public image directory
    app.include_router(api_router)
    app.mount(
        "/media",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="media",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "content_desk.main:app",
        host="0.0.0.0",
        port=8030,
        reload=True,
    )
