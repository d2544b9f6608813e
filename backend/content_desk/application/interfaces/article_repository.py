"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import datetime

from content_desk.domain.entities import Article, ArticleListFilter, ArticleState, ArticleView


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def get_many(self, article_ids: Collection[str]) -> list[Article]:
        """Retrieve every article whose id is in ``article_ids``; unknown ids are skipped."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Write every mutable field of an existing article."""
        ...

    @abstractmethod
    async def count_by_state(self, user_id: str, state: ArticleState) -> int:
        """Count the author's articles currently in ``state``."""
        ...

    @abstractmethod
    async def change_states(
        self,
        article_ids: Collection[str],
        owner_id: str,
        target: ArticleState,
        origin_states: Collection[ArticleState],
        now: datetime,
    ) -> int:
        """Move the owner's matching articles to ``target`` in one statement.

        Rows are matched on id, owner and current state, so articles changed
        concurrently are left alone. Returns the number of rows updated.
        """
        ...

    @abstractmethod
    async def list_views(self, filters: ArticleListFilter) -> list[ArticleView]:
        """Return one page of joined article views matching ``filters``."""
        ...

    @abstractmethod
    async def count(self, filters: ArticleListFilter) -> int:
        """Count every article matching ``filters`` regardless of the page window."""
        ...

    @abstractmethod
    async def get_view_by_id(self, article_id: str) -> ArticleView | None:
        ...

    @abstractmethod
    async def get_view_by_custom_uri(self, custom_uri: str) -> ArticleView | None:
        ...

    @abstractmethod
    async def count_by_title(self, user_id: str, title: str) -> int:
        """Count the author's articles whose title contains ``title`` (case-insensitive)."""
        ...
