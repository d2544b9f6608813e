"""ORM model → domain entity mappers shared by the repositories."""

from content_desk.domain.entities import (
    Article,
    ArticleState,
    AuthorSnapshot,
    Category,
    Comment,
    Theme,
)
from content_desk.infrastructure.database.models import (
    ArticleModel,
    CategoryModel,
    CommentModel,
    ThemeModel,
    UserModel,
)


def to_article(model: ArticleModel) -> Article:
    return Article(
        id=model.id,
        user_id=model.user_id,
        title=model.title,
        description=model.description,
        content=model.content,
        content_type=model.content_type,
        social_video_type=model.social_video_type,
        social_video=model.social_video,
        social_repository_type=model.social_repository_type,
        social_repository=model.social_repository,
        theme_id=model.theme_id,
        category_id=model.category_id,
        state=ArticleState(model.state),
        custom_uri=model.custom_uri,
        logo_img=model.logo_img,
        secondary_img=model.secondary_img,
        header_img=model.header_img,
        published_at=model.published_at,
        boosted_at=model.boosted_at,
        inactivated_at=model.inactivated_at,
        removed_at=model.removed_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def to_author(model: UserModel | None) -> AuthorSnapshot | None:
    """Public author projection; credential columns are never selected."""
    if model is None:
        return None
    return AuthorSnapshot(
        id=model.id,
        name=model.name,
        email=model.email,
        is_admin=model.is_admin,
        is_author=model.is_author,
        custom_url=model.custom_url,
        profile_photo=model.profile_photo,
    )


def to_theme(model: ThemeModel | None) -> Theme | None:
    if model is None:
        return None
    return Theme(id=model.id, name=model.name, state=model.state, description=model.description)


def to_category(model: CategoryModel | None) -> Category | None:
    if model is None:
        return None
    return Category(
        id=model.id,
        name=model.name,
        theme_id=model.theme_id,
        state=model.state,
        description=model.description,
    )


def to_comment(model: CommentModel) -> Comment:
    return Comment(
        id=model.id,
        article_id=model.article_id,
        answer_of=model.answer_of,
        user_name=model.user_name,
        user_email=model.user_email,
        message=model.message,
        confirmed_at=model.confirmed_at,
        readed_at=model.readed_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
