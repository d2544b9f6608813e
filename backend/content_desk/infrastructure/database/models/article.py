"""SQLAlchemy ORM model for the Article entity."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from content_desk.infrastructure.database.base import Base


class ArticleModel(Base):
    """ORM model — maps to the 'articles' table."""

    __tablename__ = "articles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    social_video_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    social_video: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    social_repository_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    social_repository: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    theme_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("themes.id"), nullable=True, index=True
    )
    category_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.id"), nullable=True, index=True
    )
    state: Mapped[str] = mapped_column(String(20), default="draft", nullable=False, index=True)
    custom_uri: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    logo_img: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    secondary_img: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    header_img: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    boosted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    inactivated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    removed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
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

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, title='{self.title}', state='{self.state}')>"
