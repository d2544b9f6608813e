from .base import Base, StatsBase
from .session import (
    async_session_factory,
    engine,
    get_db_session,
    get_stats_session,
    stats_engine,
    stats_session_factory,
)

__all__ = [
    "Base",
    "StatsBase",
    "engine",
    "stats_engine",
    "async_session_factory",
    "stats_session_factory",
    "get_db_session",
    "get_stats_session",
]
