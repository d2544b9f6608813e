"""Application service for the two-tier comment thread."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

from content_desk.application.interfaces import (
    ArticleRepository,
    CommentRepository,
    NotificationDispatcher,
)
from content_desk.application.services.article_query_service import normalize_page
from content_desk.domain import access_policy
from content_desk.domain.entities import Actor, Article, Comment, CommentView, ReadPartition
from content_desk.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForbiddenError,
    InvalidInputError,
)
from content_desk.domain.identifiers import is_valid_id

logger = logging.getLogger(__name__)

ANSWER_MAX_LENGTH = 10_000
ANSWER_TEMPLATE = "answer-sent"
DEFAULT_LIMIT = 10

_pending_notifications: set[asyncio.Task] = set()


async def drain_notifications() -> None:
    """Wait for answer notifications still in flight (shutdown and tests)."""
    if _pending_notifications:
        await asyncio.gather(*list(_pending_notifications), return_exceptions=True)


@dataclass
class CommentPage:
    comments: list[CommentView]
    count: int
    limit: int


@dataclass
class FlatCommentPage:
    comments: list[Comment]
    count: int
    limit: int


class CommentThreadService:
    """Root-comment listings, thread resolution, answers and read tracking.

    Comments are flat rows with an optional parent; every read path stops at
    the direct answers of a root comment.
    """

    def __init__(
        self,
        repository: CommentRepository,
        articles: ArticleRepository,
        notifier: NotificationDispatcher,
        default_limit: int = DEFAULT_LIMIT,
    ):
        self._repository = repository
        self._articles = articles
        self._notifier = notifier
        self._default_limit = default_limit

    async def list_roots(
        self,
        actor: Actor,
        partition: str | None,
        page: int | None = None,
        limit: int | None = None,
    ) -> CommentPage:
        try:
            read_partition = ReadPartition(partition)
        except ValueError:
            raise InvalidInputError("type", "Invalid comment type") from None

        page, limit = normalize_page(page, limit, self._default_limit)
        count = await self._repository.count_roots(actor.id, read_partition)
        comments = await self._repository.list_roots(
            actor.id, read_partition, skip=(page - 1) * limit, limit=limit
        )
        return CommentPage(comments=comments, count=count, limit=limit)

    async def get_thread(self, actor: Actor, comment_id: str) -> CommentView:
        """A root comment with its direct answers, for the article's author or an admin."""
        return await self._authorized_thread(actor, comment_id, access_policy.can_view_article)

    async def get_answers(
        self,
        actor: Actor,
        root_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> FlatCommentPage:
        await self._authorized_thread(actor, root_id, access_policy.can_view_article)
        page, limit = normalize_page(page, limit, self._default_limit)
        count = await self._repository.count_answers(root_id)
        answers = await self._repository.list_answers(
            root_id, skip=(page - 1) * limit, limit=limit
        )
        return FlatCommentPage(comments=answers, count=count, limit=limit)

    async def list_article_comments(
        self,
        actor: Actor,
        article_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> FlatCommentPage:
        """Root comments of a single article, for its author or an admin."""
        article = await self._articles.get_by_id(article_id) if is_valid_id(article_id) else None
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        if not access_policy.can_view_article(actor, article):
            raise ForbiddenError()

        page, limit = normalize_page(page, limit, self._default_limit)
        count = await self._repository.count_by_article(article_id)
        comments = await self._repository.list_by_article(
            article_id, skip=(page - 1) * limit, limit=limit
        )
        return FlatCommentPage(comments=comments, count=count, limit=limit)

    async def mark_read(self, actor: Actor, comment_id: str) -> None:
        await self._authorized_thread(actor, comment_id, access_policy.can_mutate_article)
        updated = await self._repository.mark_read(comment_id, datetime.now(timezone.utc))
        if not updated:
            raise ConflictError("id", "This comment is already marked as read")

    async def answer(
        self, root_id: str, actor: Actor, message: str, notify: str | None = "no"
    ) -> Comment:
        """Answer a root comment as the article's author (or an admin).

        With ``notify="yes"`` the reader is notified in the background; the
        answer is kept even when that notification cannot be delivered.
        """
        if message is None or len(message) > ANSWER_MAX_LENGTH:
            raise InvalidInputError(
                "answer", f"Answers are limited to {ANSWER_MAX_LENGTH} characters"
            )

        root = await self._repository.get_thread(root_id) if is_valid_id(root_id) else None
        if root is None or root.article is None:
            raise EntityNotFoundError("Comment", root_id, name="answer_of")
        await self._ensure_allowed(actor, root, access_policy.can_mutate_article)

        answer = await self._repository.create(
            Comment(
                article_id=root.article.id,
                user_name=actor.name,
                user_email=actor.email,
                message=message,
                answer_of=root.comment.id,
            )
        )
        logger.info("Comment %s answered by %s", root_id, actor.id)

        if (notify or "no") == "yes":
            task = asyncio.create_task(self._notify_reader(root, answer))
            _pending_notifications.add(task)
            task.add_done_callback(_pending_notifications.discard)
        return answer

    async def _authorized_thread(
        self, actor: Actor, comment_id: str, allowed: Callable[[Actor, Article], bool]
    ) -> CommentView:
        _ensure_id(comment_id)
        view = await self._repository.get_thread(comment_id)
        if view is None or view.article is None:
            raise EntityNotFoundError("Comment", comment_id)
        await self._ensure_allowed(actor, view, allowed)
        return view

    async def _ensure_allowed(
        self, actor: Actor, view: CommentView, allowed: Callable[[Actor, Article], bool]
    ) -> None:
        article = await self._articles.get_by_id(view.article.id)
        if article is None or not allowed(actor, article):
            raise ForbiddenError("Only the article's author or an admin can access its comments")

    async def _notify_reader(self, root: CommentView, answer: Comment) -> None:
        payload = {"comment": asdict(root), "answer": asdict(answer)}
        try:
            await self._notifier.send(ANSWER_TEMPLATE, payload)
        except Exception:
            logger.exception("Could not notify %s about answer %s", root.comment.user_email, answer.id)


def _ensure_id(value: str) -> None:
    if not is_valid_id(value):
        raise InvalidInputError("id", "Invalid identifier")
