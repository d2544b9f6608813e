"""Comment thread persistence backed by SQLAlchemy.

Comments are flat rows; the latest answer of each listed root is fetched in a
second query keyed by the page's root ids.
"""

from datetime import datetime

from sqlalchemy import Select, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from content_desk.application.interfaces import CommentRepository
from content_desk.domain.entities import (
    ArticleSummary,
    Comment,
    CommentView,
    ReadPartition,
)
from content_desk.infrastructure.database.models import ArticleModel, CommentModel, UserModel

from .mappers import to_author, to_comment


class SQLAlchemyCommentRepository(CommentRepository):
    """Implements the CommentRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def savepoint(self) -> AsyncSessionTransaction:
        return self._session.begin_nested()

    # ── Root listings ───────────────────────────────────────────────

    async def list_roots(
        self, author_id: str, partition: ReadPartition, skip: int, limit: int
    ) -> list[CommentView]:
        stmt = (
            self._roots_of_author(self._summary_select(), author_id, partition)
            .order_by(CommentModel.created_at.desc(), CommentModel.id)
            .offset(skip)
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).all()
        latest = await self._latest_answers([comment.id for comment, *_ in rows])
        return [
            CommentView(
                comment=to_comment(comment),
                article=self._to_summary(article, author),
                answer=latest.get(comment.id),
            )
            for comment, article, author in rows
        ]

    async def count_roots(self, author_id: str, partition: ReadPartition) -> int:
        stmt = self._roots_of_author(
            select(func.count(CommentModel.id)).join(
                ArticleModel, ArticleModel.id == CommentModel.article_id
            ),
            author_id,
            partition,
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def _latest_answers(self, root_ids: list[str]) -> dict[str, Comment]:
        if not root_ids:
            return {}
        stmt = (
            select(CommentModel)
            .where(CommentModel.answer_of.in_(root_ids))
            .order_by(CommentModel.created_at, CommentModel.id)
        )
        latest: dict[str, Comment] = {}
        for model in (await self._session.execute(stmt)).scalars().all():
            latest[model.answer_of] = to_comment(model)
        return latest

    # ── Thread ──────────────────────────────────────────────────────

    async def get_thread(self, comment_id: str) -> CommentView | None:
        stmt = self._summary_select(outer=True).where(
            CommentModel.id == comment_id, CommentModel.answer_of.is_(None)
        )
        row = (await self._session.execute(stmt)).first()
        if row is None:
            return None
        comment, article, author = row
        answers_stmt = (
            select(CommentModel)
            .where(CommentModel.answer_of == comment_id)
            .order_by(CommentModel.created_at, CommentModel.id)
        )
        answers = (await self._session.execute(answers_stmt)).scalars().all()
        return CommentView(
            comment=to_comment(comment),
            article=self._to_summary(article, author),
            answers=[to_comment(a) for a in answers],
        )

    async def list_answers(self, root_id: str, skip: int, limit: int) -> list[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.answer_of == root_id)
            .order_by(CommentModel.created_at, CommentModel.id)
            .offset(skip)
            .limit(limit)
        )
        return [to_comment(m) for m in (await self._session.execute(stmt)).scalars().all()]

    async def count_answers(self, root_id: str) -> int:
        stmt = select(func.count(CommentModel.id)).where(CommentModel.answer_of == root_id)
        return (await self._session.execute(stmt)).scalar_one()

    # ── Per article ─────────────────────────────────────────────────

    async def list_by_article(self, article_id: str, skip: int, limit: int) -> list[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.article_id == article_id, CommentModel.answer_of.is_(None))
            .order_by(CommentModel.created_at.desc(), CommentModel.id)
            .offset(skip)
            .limit(limit)
        )
        return [to_comment(m) for m in (await self._session.execute(stmt)).scalars().all()]

    async def count_by_article(self, article_id: str) -> int:
        stmt = select(func.count(CommentModel.id)).where(
            CommentModel.article_id == article_id, CommentModel.answer_of.is_(None)
        )
        return (await self._session.execute(stmt)).scalar_one()

    # ── Writes ──────────────────────────────────────────────────────

    async def mark_read(self, comment_id: str, now: datetime) -> int:
        stmt = (
            update(CommentModel)
            .where(CommentModel.id == comment_id, CommentModel.readed_at.is_(None))
            .values(readed_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            id=comment.id,
            article_id=comment.article_id,
            answer_of=comment.answer_of,
            user_name=comment.user_name,
            user_email=comment.user_email,
            message=comment.message,
            confirmed_at=comment.confirmed_at,
            readed_at=comment.readed_at,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return to_comment(model)

    # ── Stats ───────────────────────────────────────────────────────

    async def count_roots_between(
        self, start: datetime, end: datetime, author_id: str | None = None
    ) -> int:
        stmt = select(func.count(CommentModel.id)).where(
            CommentModel.answer_of.is_(None),
            CommentModel.created_at >= start,
            CommentModel.created_at < end,
        )
        if author_id is not None:
            stmt = stmt.join(ArticleModel, ArticleModel.id == CommentModel.article_id).where(
                ArticleModel.user_id == author_id
            )
        return (await self._session.execute(stmt)).scalar_one()

    # ── Query building ──────────────────────────────────────────────

    @staticmethod
    def _summary_select(outer: bool = False) -> Select:
        stmt = select(CommentModel, ArticleModel, UserModel)
        if outer:
            stmt = stmt.outerjoin(ArticleModel, ArticleModel.id == CommentModel.article_id)
        else:
            stmt = stmt.join(ArticleModel, ArticleModel.id == CommentModel.article_id)
        return stmt.outerjoin(UserModel, UserModel.id == ArticleModel.user_id)

    @staticmethod
    def _roots_of_author(stmt: Select, author_id: str, partition: ReadPartition) -> Select:
        stmt = stmt.where(CommentModel.answer_of.is_(None), ArticleModel.user_id == author_id)
        if partition == ReadPartition.NOT_READED:
            stmt = stmt.where(CommentModel.readed_at.is_(None))
        elif partition == ReadPartition.ONLY_READED:
            stmt = stmt.where(CommentModel.readed_at.is_not(None))
        return stmt

    @staticmethod
    def _to_summary(article: ArticleModel | None, author: UserModel | None) -> ArticleSummary | None:
        if article is None:
            return None
        return ArticleSummary(
            id=article.id,
            title=article.title,
            custom_uri=article.custom_uri,
            author=to_author(author),
        )
