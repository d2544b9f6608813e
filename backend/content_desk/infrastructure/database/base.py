"""SQLAlchemy ORM bases and model registries.

The content store and the stats store are separate databases, so each has
its own metadata.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for content-store models (articles, comments, taxonomy, users)."""

    pass


class StatsBase(DeclarativeBase):
    """Base class for stats-store models (comment rollups, comment settings)."""

    pass
