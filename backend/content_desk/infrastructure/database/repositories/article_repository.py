"""Concrete article repository backed by SQLAlchemy."""

from collections.abc import Collection
from datetime import datetime

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from content_desk.application.interfaces import ArticleRepository
from content_desk.domain.entities import (
    Article,
    ArticleListFilter,
    ArticleState,
    ArticleView,
)
from content_desk.infrastructure.database.models import (
    ArticleModel,
    CategoryModel,
    ThemeModel,
    UserModel,
)

from .mappers import to_article, to_author, to_category, to_theme

_MUTABLE_COLUMNS = (
    "title",
    "description",
    "content",
    "content_type",
    "social_video_type",
    "social_video",
    "social_repository_type",
    "social_repository",
    "theme_id",
    "category_id",
    "custom_uri",
    "logo_img",
    "secondary_img",
    "header_img",
    "published_at",
    "boosted_at",
    "inactivated_at",
    "removed_at",
    "updated_at",
)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, article_id: str) -> Article | None:
        # Bulk state changes bypass the identity map; always reload.
        result = await self._session.get(ArticleModel, article_id, populate_existing=True)
        return to_article(result) if result else None

    async def get_many(self, article_ids: Collection[str]) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(ArticleModel.id.in_(list(article_ids)))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [to_article(row) for row in result.scalars().all()]

    async def create(self, article: Article) -> Article:
        model = ArticleModel(
            id=article.id,
            user_id=article.user_id,
            state=article.state.value,
            created_at=article.created_at,
            **{column: getattr(article, column) for column in _MUTABLE_COLUMNS},
        )
        self._session.add(model)
        await self._session.flush()
        return to_article(model)

    async def update(self, article: Article) -> Article:
        model = await self._session.get(ArticleModel, article.id)
        if model is None:
            raise ValueError(f"Article {article.id} not found in database")
        for column in _MUTABLE_COLUMNS:
            setattr(model, column, getattr(article, column))
        model.state = article.state.value
        await self._session.flush()
        return to_article(model)

    async def count_by_state(self, user_id: str, state: ArticleState) -> int:
        stmt = select(func.count(ArticleModel.id)).where(
            ArticleModel.user_id == user_id, ArticleModel.state == state.value
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def change_states(
        self,
        article_ids: Collection[str],
        owner_id: str,
        target: ArticleState,
        origin_states: Collection[ArticleState],
        now: datetime,
    ) -> int:
        values: dict = {"state": target.value, "updated_at": now}
        stamp = target.timestamp_field
        if stamp:
            column = getattr(ArticleModel, stamp)
            values[stamp] = func.coalesce(column, now)

        stmt = (
            update(ArticleModel)
            .where(
                ArticleModel.id.in_(list(article_ids)),
                ArticleModel.user_id == owner_id,
                ArticleModel.state.in_([s.value for s in origin_states]),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    # ── Views ───────────────────────────────────────────────────────

    async def list_views(self, filters: ArticleListFilter) -> list[ArticleView]:
        order = ArticleModel.created_at.desc() if filters.descending else ArticleModel.created_at.asc()
        stmt = (
            self._filtered(self._view_select(), filters)
            .order_by(order, ArticleModel.id)
            .offset(filters.offset)
            .limit(filters.limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_view(*row) for row in result.all()]

    async def count(self, filters: ArticleListFilter) -> int:
        stmt = self._filtered(select(func.count(ArticleModel.id)), filters)
        return (await self._session.execute(stmt)).scalar_one()

    async def get_view_by_id(self, article_id: str) -> ArticleView | None:
        stmt = self._view_select().where(ArticleModel.id == article_id)
        row = (await self._session.execute(stmt)).first()
        return self._to_view(*row) if row else None

    async def get_view_by_custom_uri(self, custom_uri: str) -> ArticleView | None:
        stmt = self._view_select().where(ArticleModel.custom_uri == custom_uri)
        row = (await self._session.execute(stmt)).first()
        return self._to_view(*row) if row else None

    async def count_by_title(self, user_id: str, title: str) -> int:
        stmt = select(func.count(ArticleModel.id)).where(
            ArticleModel.user_id == user_id,
            ArticleModel.title.icontains(title, autoescape=True),
        )
        return (await self._session.execute(stmt)).scalar_one()

    # ── Query building ──────────────────────────────────────────────

    @staticmethod
    def _view_select() -> Select:
        return (
            select(ArticleModel, ThemeModel, CategoryModel, UserModel)
            .outerjoin(ThemeModel, ThemeModel.id == ArticleModel.theme_id)
            .outerjoin(CategoryModel, CategoryModel.id == ArticleModel.category_id)
            .outerjoin(UserModel, UserModel.id == ArticleModel.user_id)
        )

    @staticmethod
    def _filtered(stmt: Select, filters: ArticleListFilter) -> Select:
        stmt = stmt.where(ArticleModel.state != ArticleState.REMOVED.value)
        if filters.user_id:
            stmt = stmt.where(ArticleModel.user_id == filters.user_id)
        if filters.theme_id:
            stmt = stmt.where(ArticleModel.theme_id == filters.theme_id)
        if filters.category_id:
            stmt = stmt.where(ArticleModel.category_id == filters.category_id)
        if filters.query:
            stmt = stmt.where(
                or_(
                    ArticleModel.title.icontains(filters.query, autoescape=True),
                    ArticleModel.description.icontains(filters.query, autoescape=True),
                    ArticleModel.content.icontains(filters.query, autoescape=True),
                )
            )
        return stmt

    @staticmethod
    def _to_view(
        article: ArticleModel,
        theme: ThemeModel | None,
        category: CategoryModel | None,
        author: UserModel | None,
    ) -> ArticleView:
        return ArticleView(
            article=to_article(article),
            theme=to_theme(theme),
            category=to_category(category),
            author=to_author(author),
        )
