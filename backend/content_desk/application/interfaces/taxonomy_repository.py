"""Port for theme and category lookups."""

from abc import ABC, abstractmethod

from content_desk.domain.entities import Category, Theme


class TaxonomyRepository(ABC):
    @abstractmethod
    async def get_theme(self, theme_id: str) -> Theme | None:
        ...

    @abstractmethod
    async def get_category(self, category_id: str) -> Category | None:
        ...
