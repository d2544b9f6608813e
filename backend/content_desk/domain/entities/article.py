"""Domain entities for articles and their denormalized views."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from content_desk.domain.identifiers import default_custom_uri, new_id

from .taxonomy import Category, Theme
from .user import AuthorSnapshot


class ArticleState(str, Enum):
    """Lifecycle states of an article. ``REMOVED`` is terminal."""

    DRAFT = "draft"
    PUBLISHED = "published"
    INACTIVATED = "inactivated"
    BOOSTED = "boosted"
    REMOVED = "removed"

    @classmethod
    def from_string(cls, value: str) -> "ArticleState":
        for state in cls:
            if state.value == value:
                return state
        raise ValueError(f"Unknown state: {value}")

    @property
    def timestamp_field(self) -> str | None:
        """Name of the ``<state>_at`` attribute stamped on entry, if any."""
        if self is ArticleState.DRAFT:
            return None
        return f"{self.value}_at"


# Targets reachable through the single-article transition.
SINGLE_TRANSITION_TARGETS: frozenset[ArticleState] = frozenset({
    ArticleState.BOOSTED,
    ArticleState.INACTIVATED,
    ArticleState.PUBLISHED,
})

# Bulk transitions: target → states an article must currently be in.
BULK_ORIGIN_STATES: dict[ArticleState, frozenset[ArticleState]] = {
    ArticleState.PUBLISHED: frozenset({ArticleState.INACTIVATED, ArticleState.DRAFT}),
    ArticleState.BOOSTED: frozenset({ArticleState.PUBLISHED}),
    ArticleState.INACTIVATED: frozenset({ArticleState.PUBLISHED, ArticleState.BOOSTED}),
    ArticleState.REMOVED: frozenset({ArticleState.DRAFT}),
}


class ImageKind(str, Enum):
    """Image slots an article exposes."""

    LOGO = "logo"
    SECONDARY = "secondary"
    HEADER = "header"

    @property
    def field_name(self) -> str:
        return f"{self.value}_img"


@dataclass
class Article:
    """Core domain entity for a piece of published content."""

    title: str
    user_id: str
    id: str = field(default_factory=new_id)
    description: str | None = None
    content: str | None = None
    content_type: str | None = None
    social_video_type: str | None = None
    social_video: str | None = None
    social_repository_type: str | None = None
    social_repository: str | None = None
    theme_id: str | None = None
    category_id: str | None = None
    state: ArticleState = ArticleState.DRAFT
    custom_uri: str = field(default_factory=default_custom_uri)
    logo_img: str | None = None
    secondary_img: str | None = None
    header_img: str | None = None
    published_at: datetime | None = None
    boosted_at: datetime | None = None
    inactivated_at: datetime | None = None
    removed_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def enter_state(self, state: ArticleState, now: datetime | None = None) -> None:
        """Move to ``state``, stamping its timestamp only on the first entry."""
        now = now or datetime.now(timezone.utc)
        self.state = state
        stamp = state.timestamp_field
        if stamp and getattr(self, stamp) is None:
            setattr(self, stamp, now)
        self.updated_at = now

    def image(self, kind: ImageKind) -> str | None:
        return getattr(self, kind.field_name)

    def set_image(self, kind: ImageKind, url: str | None) -> None:
        setattr(self, kind.field_name, url)
        self.updated_at = datetime.now(timezone.utc)


@dataclass
class ArticleView:
    """An article joined with its theme, category and author snapshots."""

    article: Article
    theme: Theme | None = None
    category: Category | None = None
    author: AuthorSnapshot | None = None


@dataclass
class ArticleListFilter:
    """Normalized filters for the article listing."""

    query: str = ""
    theme_id: str | None = None
    category_id: str | None = None
    user_id: str | None = None  # None → every author
    descending: bool = True
    page: int = 1
    limit: int = 6

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
