"""Theme and category lookups backed by SQLAlchemy."""

from sqlalchemy.ext.asyncio import AsyncSession

from content_desk.application.interfaces import TaxonomyRepository
from content_desk.domain.entities import Category, Theme
from content_desk.infrastructure.database.models import CategoryModel, ThemeModel

from .mappers import to_category, to_theme


class SQLAlchemyTaxonomyRepository(TaxonomyRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_theme(self, theme_id: str) -> Theme | None:
        return to_theme(await self._session.get(ThemeModel, theme_id))

    async def get_category(self, category_id: str) -> Category | None:
        return to_category(await self._session.get(CategoryModel, category_id))
