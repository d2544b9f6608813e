"""Domain entities for the two-tier comment thread."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from content_desk.domain.identifiers import new_id

from .user import AuthorSnapshot


class ReadPartition(str, Enum):
    """Read-state slices of an author's root comments."""

    ALL = "all"
    NOT_READED = "not-readed"
    ONLY_READED = "only-readed"


@dataclass
class Comment:
    """A reader comment. ``answer_of`` is None for root comments."""

    article_id: str
    user_name: str
    user_email: str
    message: str
    id: str = field(default_factory=new_id)
    answer_of: str | None = None
    confirmed_at: datetime | None = None
    readed_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_root(self) -> bool:
        return self.answer_of is None


@dataclass
class ArticleSummary:
    """The slice of an article shown next to its comments."""

    id: str
    title: str
    custom_uri: str | None
    author: AuthorSnapshot | None = None


@dataclass
class CommentView:
    """A root comment with its article summary.

    Listings fill ``answer`` with the latest direct answer; the thread view
    fills ``answers`` with every direct answer. Answers are never expanded
    further.
    """

    comment: Comment
    article: ArticleSummary | None = None
    answer: Comment | None = None
    answers: list[Comment] = field(default_factory=list)
