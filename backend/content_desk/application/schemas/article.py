"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from content_desk.domain.entities import ArticleView, AuthorSnapshot, Category, Theme


class ArticleCreate(BaseModel):
    """Schema for creating a new article — only the title is needed up front."""

    title: str = Field(..., max_length=100, examples=["Getting Started"])


class ArticleUpdate(BaseModel):
    """Schema for a partial article update.

    Unknown keys (``user_id``, ``state``, image fields, ...) are ignored, so
    ownership, lifecycle and images can only change through their own operations.
    """

    title: str | None = Field(None, max_length=100)
    description: str | None = None
    content: str | None = None
    content_type: str | None = None
    social_video_type: str | None = None
    social_video: str | None = None
    social_repository_type: str | None = None
    social_repository: str | None = None
    theme_id: str | None = None
    category_id: str | None = None
    custom_uri: str | None = None


class ArticleStatesChange(BaseModel):
    """Schema for a bulk state change."""

    state: str = Field(..., examples=["published"])
    articles_id: list[str] = Field(..., examples=[["0d9c3f1e-8a51-4b1e-9a55-2f3c2f5b7d10"]])


class ArticleStatesChangeResult(BaseModel):
    changed: int


class TitleLookup(BaseModel):
    title: str = Field(..., examples=["Getting Started"])


class ExistingArticlesResponse(BaseModel):
    exist_articles: bool
    quantity: int


class ImageResponse(BaseModel):
    kind: str
    url: str


class ThemeSnapshot(BaseModel):
    id: str
    name: str
    state: str
    description: str | None = None

    model_config = {"from_attributes": True}


class CategorySnapshot(BaseModel):
    id: str
    name: str
    theme_id: str
    state: str
    description: str | None = None

    model_config = {"from_attributes": True}


class AuthorResponse(BaseModel):
    """Author projection — credential fields are never part of it."""

    id: str
    name: str
    email: str | None = None
    is_admin: bool = False
    is_author: bool = False
    custom_url: str | None = None
    profile_photo: str | None = None

    model_config = {"from_attributes": True}


class ArticleResponse(BaseModel):
    """Denormalized article returned to the client."""

    id: str
    title: str
    description: str | None = None
    content: str | None = None
    content_type: str | None = None
    social_video_type: str | None = None
    social_video: str | None = None
    social_repository_type: str | None = None
    social_repository: str | None = None
    state: str
    custom_uri: str | None = None
    theme: ThemeSnapshot | None = None
    category: CategorySnapshot | None = None
    author: AuthorResponse | None = None
    logo_img: str | None = None
    secondary_img: str | None = None
    header_img: str | None = None
    published_at: datetime | None = None
    boosted_at: datetime | None = None
    inactivated_at: datetime | None = None
    removed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: ArticleView) -> "ArticleResponse":
        article = view.article
        return cls(
            id=article.id,
            title=article.title,
            description=article.description,
            content=article.content,
            content_type=article.content_type,
            social_video_type=article.social_video_type,
            social_video=article.social_video,
            social_repository_type=article.social_repository_type,
            social_repository=article.social_repository,
            state=article.state.value,
            custom_uri=article.custom_uri,
            theme=_snapshot(ThemeSnapshot, view.theme),
            category=_snapshot(CategorySnapshot, view.category),
            author=_snapshot(AuthorResponse, view.author),
            logo_img=article.logo_img,
            secondary_img=article.secondary_img,
            header_img=article.header_img,
            published_at=article.published_at,
            boosted_at=article.boosted_at,
            inactivated_at=article.inactivated_at,
            removed_at=article.removed_at,
            created_at=article.created_at,
            updated_at=article.updated_at,
        )


class ArticleListResponse(BaseModel):
    articles: list[ArticleResponse]
    count: int
    limit: int


def _snapshot(schema: type[BaseModel], value: Theme | Category | AuthorSnapshot | None):
    if value is None:
        return None
    return schema.model_validate(value, from_attributes=True)
