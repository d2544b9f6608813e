"""Logging setup for the service.

Every logger the service cares about belongs to a category, and each category
takes its level from one ``log_level_*`` setting. That way the rollup job can
run at DEBUG while SQL echo and outbound HTTP stay quiet.

    from content_desk.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the lifespan
"""

import logging
import sys

from content_desk.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field -> logger names it governs.
CATEGORY_LOGGERS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_jobs": (
        "content_desk.application.services.stats_aggregator",
        "content_desk.application.services.stats_scheduler",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-category levels; returns ``{logger name: level}``.

    A stderr handler is attached to the root logger only when nothing else
    (uvicorn, pytest) installed one first.
    """
    settings = settings or get_settings()
    root = logging.getLogger()
    root.setLevel(parse_level(settings.log_level))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for field_name, logger_names in CATEGORY_LOGGERS.items():
        level = parse_level(getattr(settings, field_name))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s http=%s uvicorn=%s jobs=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_uvicorn,
        settings.log_level_jobs,
    )
    return applied


def parse_level(raw: str | None) -> int:
    """Level name to its numeric value; anything unknown means INFO."""
    numeric = getattr(logging, (raw or "").strip().upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
