"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from content_desk.config import get_settings
from content_desk.application.interfaces import NotificationDispatcher
from content_desk.application.services import (
    ArticleLifecycleService,
    ArticleQueryService,
    CommentSettingsService,
    CommentStatsService,
    CommentThreadService,
)
from content_desk.domain.entities import Actor
from content_desk.infrastructure.database.session import get_db_session, get_stats_session
from content_desk.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyCommentRepository,
    SQLAlchemyCommentSettingsRepository,
    SQLAlchemyStatRecordRepository,
    SQLAlchemyTaxonomyRepository,
    SQLAlchemyUserRepository,
)
from content_desk.infrastructure.notifications import (
    LoggingNotificationDispatcher,
    WebhookNotificationDispatcher,
)
from content_desk.infrastructure.storage.local_object_storage import LocalObjectStorage

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY


async def get_actor(
    x_user_id: str | None = Header(default=None),
    x_user_admin: str | None = Header(default=None),
    x_user_author: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
) -> Actor:
    """Identity asserted by the authenticating gateway in front of this service."""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authenticated user",
        )
    return Actor(
        id=x_user_id,
        is_admin=_flag(x_user_admin),
        is_author=_flag(x_user_author),
        email=x_user_email or "",
        name=x_user_name or "",
    )


def build_notification_dispatcher() -> NotificationDispatcher:
    settings = get_settings()
    if settings.notification_webhook_url.strip():
        return WebhookNotificationDispatcher(
            url=settings.notification_webhook_url,
            timeout=settings.notification_timeout,
        )
    return LoggingNotificationDispatcher()


async def get_article_lifecycle_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleLifecycleService, None]:
    """Provides an ArticleLifecycleService with repositories and image storage wired up."""
    settings = get_settings()
    yield ArticleLifecycleService(
        repository=SQLAlchemyArticleRepository(session),
        taxonomy=SQLAlchemyTaxonomyRepository(session),
        storage=LocalObjectStorage(
            upload_dir=settings.upload_dir,
            public_url=settings.storage_public_url,
        ),
    )


async def get_article_query_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleQueryService, None]:
    settings = get_settings()
    yield ArticleQueryService(
        SQLAlchemyArticleRepository(session),
        default_limit=settings.articles_default_limit,
        max_limit=settings.max_page_limit,
    )


async def get_comment_thread_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CommentThreadService, None]:
    """Provides a CommentThreadService; notifications go to the mailer webhook when configured."""
    settings = get_settings()
    yield CommentThreadService(
        repository=SQLAlchemyCommentRepository(session),
        articles=SQLAlchemyArticleRepository(session),
        notifier=build_notification_dispatcher(),
        default_limit=settings.comments_default_limit,
    )


async def get_comment_settings_service(
    session: AsyncSession = Depends(get_db_session),
    stats_session: AsyncSession = Depends(get_stats_session),
) -> AsyncGenerator[CommentSettingsService, None]:
    """Settings rows live in the stats store; users are verified against the content store."""
    settings = get_settings()
    yield CommentSettingsService(
        repository=SQLAlchemyCommentSettingsRepository(stats_session),
        users=SQLAlchemyUserRepository(session),
        ttl_days=settings.comment_settings_ttl_days,
        strict_notify_merge=settings.comment_settings_strict_notify_merge,
    )


async def get_comment_stats_service(
    stats_session: AsyncSession = Depends(get_stats_session),
) -> AsyncGenerator[CommentStatsService, None]:
    yield CommentStatsService(SQLAlchemyStatRecordRepository(stats_session))
