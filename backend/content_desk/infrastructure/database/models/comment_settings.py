"""SQLAlchemy ORM model for per-user comment settings (stats store)."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from content_desk.infrastructure.database.base import StatsBase


class CommentSettingsModel(StatsBase):
    """ORM model — maps to the 'comment_settings' table.

    ``notify`` is an integer column: the merge can write a previous ``limit``
    value into it, and readers coerce it to a boolean.
    """

    __tablename__ = "comment_settings"

    user_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    type: Mapped[str] = mapped_column(String(20), default="all", nullable=False)
    order: Mapped[str] = mapped_column(String(4), default="desc", nullable=False)
    answers_type: Mapped[str] = mapped_column(String(20), default="all", nullable=False)
    answers_order: Mapped[str] = mapped_column(String(4), default="desc", nullable=False)
    limit: Mapped[int] = mapped_column(Integer, default=10, nullable=False)
    notify: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
