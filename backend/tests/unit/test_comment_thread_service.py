"""Unit tests for the CommentThreadService."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from content_desk.application.interfaces import (
    ArticleRepository,
    CommentRepository,
    NotificationDispatcher,
)
from content_desk.application.services import CommentThreadService, drain_notifications
from content_desk.domain.entities import (
    Actor,
    Article,
    ArticleSummary,
    Comment,
    CommentView,
    ReadPartition,
)
from content_desk.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForbiddenError,
    InvalidInputError,
)
from content_desk.domain.identifiers import new_id


class FakeArticleRepository(ArticleRepository):
    def __init__(self, articles: list[Article]):
        self._articles = {a.id: a for a in articles}

    async def get_by_id(self, article_id):
        return self._articles.get(article_id)

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

    async def list_views(self, filters):
        raise NotImplementedError

    async def count(self, filters):
        raise NotImplementedError

    async def get_view_by_id(self, article_id):
        raise NotImplementedError

    async def get_view_by_custom_uri(self, custom_uri):
        raise NotImplementedError

    async def count_by_title(self, user_id, title):
        raise NotImplementedError


class FakeCommentRepository(CommentRepository):
    """In-memory flat comment rows; threads are resolved one level deep."""

    def __init__(self, articles: list[Article]):
        self._articles = {a.id: a for a in articles}
        self.comments: dict[str, Comment] = {}

    def add(self, comment: Comment) -> Comment:
        self.comments[comment.id] = comment
        return comment

    def _summary(self, article_id: str) -> ArticleSummary | None:
        article = self._articles.get(article_id)
        if article is None:
            return None
        return ArticleSummary(id=article.id, title=article.title, custom_uri=article.custom_uri)

    def _roots(self, author_id: str, partition: ReadPartition) -> list[Comment]:
        roots = []
        for comment in self.comments.values():
            article = self._articles.get(comment.article_id)
            if not comment.is_root or article is None or article.user_id != author_id:
                continue
            if partition == ReadPartition.NOT_READED and comment.readed_at is not None:
                continue
            if partition == ReadPartition.ONLY_READED and comment.readed_at is None:
                continue
            roots.append(comment)
        return sorted(roots, key=lambda c: c.created_at, reverse=True)

    def _answers(self, root_id: str) -> list[Comment]:
        answers = [c for c in self.comments.values() if c.answer_of == root_id]
        return sorted(answers, key=lambda c: (c.created_at, c.id))

    async def list_roots(self, author_id, partition, skip, limit):
        views = []
        for root in self._roots(author_id, partition)[skip : skip + limit]:
            answers = self._answers(root.id)
            views.append(
                CommentView(
                    comment=root,
                    article=self._summary(root.article_id),
                    answer=answers[-1] if answers else None,
                )
            )
        return views

    async def count_roots(self, author_id, partition):
        return len(self._roots(author_id, partition))

    async def get_thread(self, comment_id):
        comment = self.comments.get(comment_id)
        if comment is None or not comment.is_root:
            return None
        return CommentView(
            comment=comment,
            article=self._summary(comment.article_id),
            answers=self._answers(comment_id),
        )

    async def list_answers(self, root_id, skip, limit):
        return self._answers(root_id)[skip : skip + limit]

    async def count_answers(self, root_id):
        return len(self._answers(root_id))

    async def list_by_article(self, article_id, skip, limit):
        roots = [c for c in self.comments.values() if c.article_id == article_id and c.is_root]
        roots.sort(key=lambda c: c.created_at, reverse=True)
        return roots[skip : skip + limit]

    async def count_by_article(self, article_id):
        return sum(1 for c in self.comments.values() if c.article_id == article_id and c.is_root)

    async def mark_read(self, comment_id, now):
        comment = self.comments.get(comment_id)
        if comment is None or comment.readed_at is not None:
            return 0
        comment.readed_at = now
        return 1

    async def create(self, comment):
        return self.add(comment)

    async def count_roots_between(self, start, end, author_id=None):
        raise NotImplementedError


class FakeNotifier(NotificationDispatcher):
    def __init__(self, fail: bool = False):
        self.sent: list[tuple[str, dict]] = []
        self._fail = fail

    async def send(self, template, payload):
        if self._fail:
            raise ConnectionError("mailer down")
        self.sent.append((template, payload))


AUTHOR = Actor(id=new_id(), is_author=True, name="Ana", email="ana@example.com")
STRANGER = Actor(id=new_id(), is_author=True, name="Bia", email="bia@example.com")
ADMIN = Actor(id=new_id(), is_admin=True)

ARTICLE = Article(title="Async Python", user_id=AUTHOR.id)
FOREIGN_ARTICLE = Article(title="Someone else", user_id=STRANGER.id)

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _comment(index: int, article: Article = ARTICLE, **fields) -> Comment:
    return Comment(
        article_id=article.id,
        user_name=f"Reader {index}",
        user_email=f"reader{index}@example.com",
        message=f"Comment {index}",
        created_at=_EPOCH + timedelta(minutes=index),
        **fields,
    )


@pytest.fixture
def repository() -> FakeCommentRepository:
    return FakeCommentRepository([ARTICLE, FOREIGN_ARTICLE])


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def service(repository, notifier) -> CommentThreadService:
    return CommentThreadService(
        repository, FakeArticleRepository([ARTICLE, FOREIGN_ARTICLE]), notifier
    )


# ── Root listings ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_roots_scoped_to_author_with_latest_answer(service, repository):
    root = repository.add(_comment(1))
    repository.add(_comment(2, answer_of=root.id))
    latest = repository.add(_comment(3, answer_of=root.id))
    repository.add(_comment(4, article=FOREIGN_ARTICLE))

    page = await service.list_roots(AUTHOR, "all")

    assert page.count == 1
    assert page.limit == 10
    assert page.comments[0].comment.id == root.id
    assert page.comments[0].answer.id == latest.id
    assert page.comments[0].article.title == "Async Python"


@pytest.mark.asyncio
async def test_list_roots_partitions_are_disjoint_and_complete(service, repository):
    read = repository.add(_comment(1, readed_at=_EPOCH))
    unread = repository.add(_comment(2))

    everything = await service.list_roots(AUTHOR, "all")
    not_read = await service.list_roots(AUTHOR, "not-readed")
    only_read = await service.list_roots(AUTHOR, "only-readed")

    assert [v.comment.id for v in not_read.comments] == [unread.id]
    assert [v.comment.id for v in only_read.comments] == [read.id]
    assert everything.count == not_read.count + only_read.count


@pytest.mark.asyncio
async def test_list_roots_rejects_unknown_partition(service):
    with pytest.raises(InvalidInputError) as exc:
        await service.list_roots(AUTHOR, "unread")
    assert exc.value.name == "type"


@pytest.mark.asyncio
async def test_list_roots_resets_oversized_limit(service, repository):
    for i in range(12):
        repository.add(_comment(i))
    page = await service.list_roots(AUTHOR, "all", page=1, limit=500)
    assert page.limit == 10
    assert len(page.comments) == 10
    assert page.count == 12


# ── Threads ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_get_thread_returns_direct_answers_in_order(service, repository):
    root = repository.add(_comment(1))
    second = repository.add(_comment(3, answer_of=root.id))
    first = repository.add(_comment(2, answer_of=root.id))

    view = await service.get_thread(AUTHOR, root.id)
    assert [a.id for a in view.answers] == [first.id, second.id]


@pytest.mark.asyncio
async def test_get_thread_of_an_answer_is_not_found(service, repository):
    root = repository.add(_comment(1))
    answer = repository.add(_comment(2, answer_of=root.id))
    with pytest.raises(EntityNotFoundError):
        await service.get_thread(AUTHOR, answer.id)
    with pytest.raises(InvalidInputError):
        await service.get_thread(AUTHOR, "42")


@pytest.mark.asyncio
async def test_get_answers_paginates(service, repository):
    root = repository.add(_comment(1))
    for i in range(3):
        repository.add(_comment(10 + i, answer_of=root.id))

    page = await service.get_answers(AUTHOR, root.id, page=2, limit=2)
    assert page.count == 3
    assert [c.message for c in page.comments] == ["Comment 12"]


@pytest.mark.asyncio
async def test_list_article_comments_access(service, repository):
    repository.add(_comment(1))
    repository.add(_comment(2, article=FOREIGN_ARTICLE))

    page = await service.list_article_comments(AUTHOR, ARTICLE.id)
    assert page.count == 1
    assert (await service.list_article_comments(ADMIN, FOREIGN_ARTICLE.id)).count == 1
    with pytest.raises(ForbiddenError):
        await service.list_article_comments(AUTHOR, FOREIGN_ARTICLE.id)
    with pytest.raises(EntityNotFoundError):
        await service.list_article_comments(AUTHOR, new_id())


@pytest.mark.asyncio
async def test_thread_reads_are_limited_to_author_and_admin(service, repository):
    root = repository.add(_comment(1))
    repository.add(_comment(2, answer_of=root.id))

    with pytest.raises(ForbiddenError):
        await service.get_thread(STRANGER, root.id)
    with pytest.raises(ForbiddenError):
        await service.get_answers(STRANGER, root.id)

    assert (await service.get_thread(ADMIN, root.id)).comment.id == root.id
    assert (await service.get_answers(ADMIN, root.id)).count == 1

# ── Read tracking ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_mark_read_twice_conflicts(service, repository):
    comment = repository.add(_comment(1))
    await service.mark_read(AUTHOR, comment.id)
    stamped = repository.comments[comment.id].readed_at
    assert stamped is not None

    with pytest.raises(ConflictError):
        await service.mark_read(AUTHOR, comment.id)
    assert repository.comments[comment.id].readed_at == stamped


@pytest.mark.asyncio
async def test_mark_read_rejects_malformed_id(service):
    with pytest.raises(InvalidInputError):
        await service.mark_read(AUTHOR, "nope")


@pytest.mark.asyncio
async def test_mark_read_by_stranger_is_forbidden(service, repository):
    comment = repository.add(_comment(1))
    with pytest.raises(ForbiddenError):
        await service.mark_read(STRANGER, comment.id)
    assert repository.comments[comment.id].readed_at is None

    await service.mark_read(ADMIN, comment.id)
    assert repository.comments[comment.id].readed_at is not None


@pytest.mark.asyncio
async def test_mark_read_of_unknown_comment_is_not_found(service):
    with pytest.raises(EntityNotFoundError):
        await service.mark_read(AUTHOR, new_id())

# ── Answers ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_answer_creates_child_with_actor_identity(service, repository, notifier):
    root = repository.add(_comment(1))
    answer = await service.answer(root.id, AUTHOR, "Thanks!")

    assert answer.answer_of == root.id
    assert answer.article_id == ARTICLE.id
    assert answer.user_name == "Ana"
    assert answer.user_email == "ana@example.com"
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_answer_notifies_reader_when_asked(service, repository, notifier):
    root = repository.add(_comment(1))
    answer = await service.answer(root.id, AUTHOR, "Thanks!", notify="yes")
    await drain_notifications()

    assert len(notifier.sent) == 1
    template, payload = notifier.sent[0]
    assert template == "answer-sent"
    assert payload["comment"]["comment"]["user_email"] == "reader1@example.com"
    assert payload["answer"]["id"] == answer.id


@pytest.mark.asyncio
async def test_answer_survives_notification_failure(repository):
    service = CommentThreadService(
        repository, FakeArticleRepository([ARTICLE]), FakeNotifier(fail=True)
    )
    root = repository.add(_comment(1))
    answer = await service.answer(root.id, AUTHOR, "Thanks!", notify="yes")
    await drain_notifications()
    assert answer.id in repository.comments


@pytest.mark.asyncio
async def test_answer_to_unknown_root_is_not_found(service, repository):
    with pytest.raises(EntityNotFoundError) as exc:
        await service.answer(new_id(), AUTHOR, "Hello?")
    assert exc.value.name == "answer_of"

    root = repository.add(_comment(1))
    child = repository.add(_comment(2, answer_of=root.id))
    with pytest.raises(EntityNotFoundError):
        await service.answer(child.id, AUTHOR, "Nested")


@pytest.mark.asyncio
async def test_answer_rejects_long_messages(service, repository):
    root = repository.add(_comment(1))
    with pytest.raises(InvalidInputError) as exc:
        await service.answer(root.id, AUTHOR, "x" * 10_001)
    assert exc.value.name == "answer"


@pytest.mark.asyncio
async def test_answer_by_stranger_is_forbidden(service, repository, notifier):
    root = repository.add(_comment(1))
    with pytest.raises(ForbiddenError):
        await service.answer(root.id, STRANGER, "Not my article", notify="yes")

    await drain_notifications()
    assert [c.id for c in repository.comments.values()] == [root.id]
    assert notifier.sent == []


class SlowNotifier(NotificationDispatcher):
    def __init__(self):
        self.release = asyncio.Event()
        self.sent: list[str] = []

    async def send(self, template, payload):
        await self.release.wait()
        self.sent.append(template)


@pytest.mark.asyncio
async def test_answer_does_not_wait_for_notification(repository):
    notifier = SlowNotifier()
    service = CommentThreadService(repository, FakeArticleRepository([ARTICLE]), notifier)
    root = repository.add(_comment(1))

    answer = await service.answer(root.id, AUTHOR, "Thanks!", notify="yes")
    assert answer.id in repository.comments
    assert notifier.sent == []

    notifier.release.set()
    await drain_notifications()
    assert notifier.sent == ["answer-sent"]
