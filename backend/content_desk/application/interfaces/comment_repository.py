"""Port for comment persistence and the thread read paths."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from content_desk.domain.entities import Comment, CommentView, ReadPartition


class CommentRepository(ABC):
    """Comments are stored flat; read paths only ever expand one level of answers."""

    @abstractmethod
    async def list_roots(
        self, author_id: str, partition: ReadPartition, skip: int, limit: int
    ) -> list[CommentView]:
        """Root comments on the author's articles, newest first, each with its latest answer."""
        ...

    @abstractmethod
    async def count_roots(self, author_id: str, partition: ReadPartition) -> int:
        ...

    @abstractmethod
    async def get_thread(self, comment_id: str) -> CommentView | None:
        """A root comment with its article summary and direct answers; None for answers."""
        ...

    @abstractmethod
    async def list_answers(self, root_id: str, skip: int, limit: int) -> list[Comment]:
        """Direct answers of ``root_id`` in a stable ascending order."""
        ...

    @abstractmethod
    async def count_answers(self, root_id: str) -> int:
        ...

    @abstractmethod
    async def list_by_article(self, article_id: str, skip: int, limit: int) -> list[Comment]:
        """Root comments of one article, newest first."""
        ...

    @abstractmethod
    async def count_by_article(self, article_id: str) -> int:
        ...

    @abstractmethod
    async def mark_read(self, comment_id: str, now: datetime) -> int:
        """Set ``readed_at`` only where it is still empty. Returns rows updated."""
        ...

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        ...

    @abstractmethod
    async def count_roots_between(
        self, start: datetime, end: datetime, author_id: str | None = None
    ) -> int:
        """Root comments created in ``[start, end)``, optionally on one author's articles."""
        ...

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Scope whose failures are undone while the surrounding transaction stays usable."""
        yield
