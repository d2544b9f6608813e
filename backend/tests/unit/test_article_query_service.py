"""Unit tests for the ArticleQueryService."""

from datetime import datetime, timedelta, timezone

import pytest

from content_desk.application.interfaces import ArticleRepository
from content_desk.application.services import ArticleQueryService
from content_desk.application.services.article_query_service import normalize_page
from content_desk.domain.entities import (
    Actor,
    Article,
    ArticleListFilter,
    ArticleState,
    ArticleView,
)
from content_desk.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidInputError,
)
from content_desk.domain.identifiers import new_id


class FakeArticleRepository(ArticleRepository):
    """In-memory listing fake; filters mirror the SQL predicates."""

    def __init__(self):
        self._articles: dict[str, Article] = {}

    def add(self, article: Article) -> Article:
        self._articles[article.id] = article
        return article

    def _matching(self, filters: ArticleListFilter) -> list[Article]:
        needle = filters.query.lower()
        found = []
        for article in self._articles.values():
            if article.state == ArticleState.REMOVED:
                continue
            if filters.user_id and article.user_id != filters.user_id:
                continue
            if filters.theme_id and article.theme_id != filters.theme_id:
                continue
            if filters.category_id and article.category_id != filters.category_id:
                continue
            haystacks = (article.title, article.description or "", article.content or "")
            if needle and not any(needle in h.lower() for h in haystacks):
                continue
            found.append(article)
        return sorted(found, key=lambda a: a.created_at, reverse=filters.descending)

    async def list_views(self, filters: ArticleListFilter) -> list[ArticleView]:
        page = self._matching(filters)[filters.offset : filters.offset + filters.limit]
        return [ArticleView(article=a) for a in page]

    async def count(self, filters: ArticleListFilter) -> int:
        return len(self._matching(filters))

    async def get_view_by_id(self, article_id: str) -> ArticleView | None:
        article = self._articles.get(article_id)
        return ArticleView(article=article) if article else None

    async def get_view_by_custom_uri(self, custom_uri: str) -> ArticleView | None:
        for article in self._articles.values():
            if article.custom_uri == custom_uri:
                return ArticleView(article=article)
        return None

    async def count_by_title(self, user_id: str, title: str) -> int:
        return sum(
            1
            for a in self._articles.values()
            if a.user_id == user_id and title.lower() in a.title.lower()
        )

    async def get_by_id(self, article_id):
        raise NotImplementedError

    async def get_many(self, article_ids):
        raise NotImplementedError

    async def create(self, article):
        raise NotImplementedError

    async def update(self, article):
        raise NotImplementedError

    async def count_by_state(self, user_id, state):
        raise NotImplementedError

    async def change_states(self, article_ids, owner_id, target, origin_states, now):
        raise NotImplementedError


OWNER = Actor(id=new_id(), is_author=True)
STRANGER = Actor(id=new_id(), is_author=True)
ADMIN = Actor(id=new_id(), is_admin=True)

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def repository() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def service(repository) -> ArticleQueryService:
    return ArticleQueryService(repository)


def _add(repository, index: int, owner: Actor = OWNER, **fields) -> Article:
    fields.setdefault("title", f"Article {index}")
    return repository.add(
        Article(user_id=owner.id, created_at=_EPOCH + timedelta(minutes=index), **fields)
    )


def test_normalize_page():
    assert normalize_page(None, None, 6) == (1, 6)
    assert normalize_page(0, 200, 6) == (1, 6)
    assert normalize_page(-3, 5, 6) == (1, 5)
    assert normalize_page(3, 0, 10) == (3, 10)
    assert normalize_page(2, 100, 10) == (2, 100)


@pytest.mark.asyncio
async def test_list_first_page_counts_everything(service, repository):
    for i in range(8):
        _add(repository, i)

    page = await service.list_articles(OWNER, page=1, limit=6)
    assert len(page.articles) == 6
    assert page.count == 8
    assert page.limit == 6
    assert page.articles[0].article.title == "Article 7"


@pytest.mark.asyncio
async def test_list_empty_window_still_counts(service, repository):
    for i in range(3):
        _add(repository, i)
    page = await service.list_articles(OWNER, page=5, limit=2)
    assert page.articles == []
    assert page.count == 3


@pytest.mark.asyncio
async def test_list_ascending_order(service, repository):
    for i in range(3):
        _add(repository, i)
    page = await service.list_articles(OWNER, order="asc")
    assert [v.article.title for v in page.articles] == ["Article 0", "Article 1", "Article 2"]


@pytest.mark.asyncio
async def test_list_excludes_removed(service, repository):
    _add(repository, 0)
    _add(repository, 1, state=ArticleState.REMOVED)
    page = await service.list_articles(OWNER)
    assert page.count == 1


@pytest.mark.asyncio
async def test_list_type_all_only_widens_for_admins(service, repository):
    _add(repository, 0)
    _add(repository, 1, owner=STRANGER)

    assert (await service.list_articles(OWNER, type="all")).count == 1
    assert (await service.list_articles(ADMIN, type="all")).count == 2
    assert (await service.list_articles(ADMIN)).count == 0


@pytest.mark.asyncio
async def test_list_query_is_case_insensitive_over_content(service, repository):
    _add(repository, 0, content="All about AsyncIO")
    _add(repository, 1, description="Threads")
    page = await service.list_articles(OWNER, query="  asyncio ")
    assert page.count == 1


@pytest.mark.asyncio
async def test_list_ignores_malformed_theme(service, repository):
    theme_id = new_id()
    _add(repository, 0, theme_id=theme_id)
    _add(repository, 1)

    assert (await service.list_articles(OWNER, theme_id="nonsense")).count == 2
    assert (await service.list_articles(OWNER, theme_id=theme_id)).count == 1


@pytest.mark.asyncio
async def test_get_by_id_or_uri(service, repository):
    article = _add(repository, 0, custom_uri="hello-world")

    assert (await service.get_by_id_or_uri(article.id, "id")).article is article
    assert (await service.get_by_id_or_uri("hello-world", "customUri")).article is article
    assert await service.get_by_id_or_uri(new_id(), "id") is None

    with pytest.raises(InvalidInputError) as exc:
        await service.get_by_id_or_uri("hello-world", "slug")
    assert exc.value.name == "type"
    with pytest.raises(InvalidInputError) as exc:
        await service.get_by_id_or_uri("hello-world", "id")
    assert exc.value.name == "id"


@pytest.mark.asyncio
async def test_get_article_access(service, repository):
    article = _add(repository, 0)

    assert (await service.get_article(OWNER, article.id)).article is article
    assert (await service.get_article(ADMIN, article.id)).article is article
    with pytest.raises(ForbiddenError):
        await service.get_article(STRANGER, article.id)
    with pytest.raises(EntityNotFoundError):
        await service.get_article(OWNER, new_id())


@pytest.mark.asyncio
async def test_exists_by_title(service, repository):
    _add(repository, 0, title="Intro to SQL")
    _add(repository, 1, title="Advanced sql")
    _add(repository, 2, owner=STRANGER, title="SQL for others")

    assert await service.exists_by_title(OWNER, "sql") == (True, 2)
    assert await service.exists_by_title(OWNER, "graphql") == (False, 0)
    with pytest.raises(InvalidInputError):
        await service.exists_by_title(OWNER, "  ")
