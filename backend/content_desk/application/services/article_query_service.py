"""Application service for reading articles."""

from dataclasses import dataclass

from content_desk.application.interfaces import ArticleRepository
from content_desk.domain import access_policy
from content_desk.domain.entities import Actor, ArticleListFilter, ArticleView
from content_desk.domain.exceptions import EntityNotFoundError, ForbiddenError, InvalidInputError
from content_desk.domain.identifiers import is_valid_id

KEY_ID = "id"
KEY_CUSTOM_URI = "customUri"

DEFAULT_LIMIT = 6
MAX_LIMIT = 100


@dataclass
class ArticlePage:
    articles: list[ArticleView]
    count: int
    limit: int


def normalize_page(page: int | None, limit: int | None, default_limit: int, max_limit: int = MAX_LIMIT) -> tuple[int, int]:
    """Clamp paging input: page floors at 1, an out-of-range limit resets to the default."""
    page = page or 1
    limit = limit or default_limit
    if page < 1:
        page = 1
    if limit > max_limit or limit < 1:
        limit = default_limit
    return page, limit


class ArticleQueryService:
    """Filtered listings and single-article resolution."""

    def __init__(
        self,
        repository: ArticleRepository,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ):
        self._repository = repository
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def list_articles(
        self,
        actor: Actor,
        *,
        query: str | None = None,
        theme_id: str | None = None,
        category_id: str | None = None,
        type: str | None = None,
        order: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> ArticlePage:
        """List non-removed articles.

        ``type="all"`` widens the listing to every author for admins only;
        everybody else always sees their own articles. Malformed theme or
        category ids are ignored rather than rejected.
        """
        page, limit = normalize_page(page, limit, self._default_limit, self._max_limit)
        every_author = type == "all" and actor.is_admin

        filters = ArticleListFilter(
            query=(query or "").strip(),
            theme_id=theme_id if theme_id and is_valid_id(theme_id) else None,
            category_id=category_id if category_id and is_valid_id(category_id) else None,
            user_id=None if every_author else actor.id,
            descending=order != "asc",
            page=page,
            limit=limit,
        )

        count = await self._repository.count(filters)
        articles = await self._repository.list_views(filters)
        return ArticlePage(articles=articles, count=count, limit=limit)

    async def get_by_id_or_uri(self, key: str, key_kind: str) -> ArticleView | None:
        if key_kind == KEY_ID:
            if not is_valid_id(key):
                raise InvalidInputError("id", "Invalid identifier")
            return await self._repository.get_view_by_id(key)
        if key_kind == KEY_CUSTOM_URI:
            return await self._repository.get_view_by_custom_uri(key)
        raise InvalidInputError(
            "type", f"The key kind is '{key_kind}', expected '{KEY_CUSTOM_URI}' or '{KEY_ID}'"
        )

    async def get_article(self, actor: Actor, key: str, key_kind: str = KEY_ID) -> ArticleView:
        """Resolve one article for its author or an admin."""
        view = await self.get_by_id_or_uri(key, key_kind)
        if view is None:
            raise EntityNotFoundError("Article", key)
        if not access_policy.can_view_article(actor, view.article):
            raise ForbiddenError(
                "Access not authorized, only admins can view articles of other authors"
            )
        return view

    async def exists_by_title(self, actor: Actor, title: str) -> tuple[bool, int]:
        """Duplicate-title hint for the actor's own articles: (any found, how many)."""
        if not title or not title.strip():
            raise InvalidInputError("title", "A title is required for this lookup")
        quantity = await self._repository.count_by_title(actor.id, title.strip())
        return quantity > 0, quantity
