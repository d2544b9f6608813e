"""Application service (use case) for article lifecycle operations.

Covers creation, partial updates, single and bulk state transitions, soft
removal and image slots. Every mutation consults the access policy first.
"""

import logging
import re
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from content_desk.application.interfaces import ArticleRepository, ObjectStorage, TaxonomyRepository
from content_desk.application.schemas import ArticleUpdate
from content_desk.domain import access_policy
from content_desk.domain.entities import (
    Actor,
    Article,
    ArticleState,
    ArticleView,
    AuthorSnapshot,
    BULK_ORIGIN_STATES,
    ImageKind,
    SINGLE_TRANSITION_TARGETS,
)
from content_desk.domain.exceptions import (
    ConflictError,
    DependencyError,
    EntityNotFoundError,
    ForbiddenError,
    InvalidInputError,
)
from content_desk.domain.identifiers import default_custom_uri, is_valid_id

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100

# Fields an author may change through ``update``.
EDITABLE_FIELDS = frozenset({
    "title",
    "description",
    "content",
    "content_type",
    "social_video_type",
    "social_video",
    "social_repository_type",
    "social_repository",
    "theme_id",
    "category_id",
    "custom_uri",
})

_WHITESPACE = re.compile(r"\s+")


class ArticleLifecycleService:
    """Orchestrates article mutations. Depends on repository and storage ports (DI)."""

    def __init__(
        self,
        repository: ArticleRepository,
        taxonomy: TaxonomyRepository,
        storage: ObjectStorage,
    ):
        self._repository = repository
        self._taxonomy = taxonomy
        self._storage = storage

    # ── Creation & edits ────────────────────────────────────────────

    async def create_article(self, actor: Actor, title: str) -> ArticleView:
        if not title or not title.strip():
            raise InvalidInputError("title", "An article needs a title")
        if len(title) > TITLE_MAX_LENGTH:
            raise InvalidInputError(
                "title", f"Titles are limited to {TITLE_MAX_LENGTH} characters"
            )

        article = await self._repository.create(Article(title=title, user_id=actor.id))
        logger.info("Article %s created by %s", article.id, actor.id)
        return ArticleView(article=article, author=AuthorSnapshot.from_actor(actor))

    async def update_article(self, article_id: str, data: ArticleUpdate, actor: Actor) -> Article:
        supplied = data.model_dump(exclude_unset=True)
        if "title" in supplied and not supplied["title"]:
            raise InvalidInputError("title", "An article needs a title")
        if "custom_uri" in supplied and not supplied["custom_uri"]:
            raise InvalidInputError("custom_uri", "A valid custom address is required")

        article = await self._get_article(article_id)
        if not access_policy.is_owner(actor, article):
            raise ForbiddenError("Articles of another author cannot be changed")

        patch = await self._validate_patch(article, supplied)
        for key, value in patch.items():
            setattr(article, key, value)
        article.updated_at = datetime.now(timezone.utc)
        return await self._repository.update(article)

    async def _validate_patch(self, current: Article, supplied: dict[str, Any]) -> dict[str, Any]:
        """Check theme/category references and keep only editable fields."""
        theme_id = supplied.get("theme_id")
        if theme_id:
            theme = await self._taxonomy.get_theme(theme_id) if is_valid_id(theme_id) else None
            if theme is None or not theme.is_active:
                raise InvalidInputError("theme_id", "Theme not found")

        category_id = supplied.get("category_id")
        if category_id:
            if not current.theme_id and not theme_id:
                raise InvalidInputError(
                    "category_id", "A theme must be set before adding a category"
                )
            category = (
                await self._taxonomy.get_category(category_id)
                if is_valid_id(category_id)
                else None
            )
            if category is None or not category.is_active:
                raise InvalidInputError("category_id", "Category not found")

            category_theme = await self._taxonomy.get_theme(category.theme_id)
            if category_theme is None or not category_theme.is_active:
                raise InvalidInputError(
                    "category_id", "The theme of this category is inactive"
                )
            if theme_id and category_theme.id != theme_id:
                raise InvalidInputError(
                    "theme_id", "This theme is not associated with the given category"
                )

        patch = {key: value for key, value in supplied.items() if key in EDITABLE_FIELDS}
        if patch.get("custom_uri"):
            patch["custom_uri"] = _WHITESPACE.sub("", patch["custom_uri"])
        return patch

    # ── State transitions ───────────────────────────────────────────

    async def change_state(self, article_id: str, actor: Actor, new_state: str) -> Article:
        if new_state == ArticleState.REMOVED.value:
            raise InvalidInputError("state", "Use the remove operation to remove an article")
        target = _parse_state(new_state, SINGLE_TRANSITION_TARGETS)

        article = await self._get_article(article_id)
        if not access_policy.can_mutate_article(actor, article):
            raise ForbiddenError()
        if article.state == ArticleState.REMOVED:
            raise ConflictError("state", "Removed articles cannot change state")
        if article.state == target:
            raise ConflictError("state", "The article is already in this state")

        if target == ArticleState.BOOSTED:
            boosted = await self._repository.count_by_state(actor.id, ArticleState.BOOSTED)
            if access_policy.boost_quota_exceeded(actor, boosted):
                raise ConflictError("state", "Boosted articles limit reached")

        article.enter_state(target)
        logger.info("Article %s moved to %s by %s", article.id, target.value, actor.id)
        return await self._repository.update(article)

    async def change_states(
        self, actor: Actor, article_ids: Sequence[str] | None, new_state: str
    ) -> int:
        """Move many articles at once; ineligible ones are skipped silently.

        Only the actor's own articles whose current state is an origin of
        ``new_state`` are written. Returns the number of articles changed.
        """
        target = _parse_state(new_state, BULK_ORIGIN_STATES.keys())

        if not isinstance(article_ids, (list, tuple)):
            raise InvalidInputError(
                "articles_id", f"articles_id is {type(article_ids).__name__}, expected a list"
            )
        if not article_ids:
            raise InvalidInputError("articles_id", "Article identifiers are required")
        for index, article_id in enumerate(article_ids):
            if not is_valid_id(article_id):
                raise InvalidInputError(
                    "articles_id", f"The identifier at index {index} is invalid"
                )

        if target == ArticleState.BOOSTED and not actor.is_admin:
            boosted = await self._repository.count_by_state(actor.id, ArticleState.BOOSTED)
            if access_policy.bulk_boost_quota_exceeded(actor, boosted, len(article_ids)):
                raise ConflictError(
                    "articles_id", "Only one article can be boosted on this profile"
                )

        origins = BULK_ORIGIN_STATES[target]
        candidates = await self._repository.get_many(article_ids)
        eligible = [a.id for a in candidates if a.state in origins]
        if not eligible:
            return 0

        changed = await self._repository.change_states(
            eligible, actor.id, target, origins, datetime.now(timezone.utc)
        )
        logger.info(
            "Bulk move to %s by %s: %d requested, %d eligible, %d changed",
            target.value, actor.id, len(article_ids), len(eligible), changed,
        )
        return changed

    async def remove_article(self, article_id: str, actor: Actor) -> Article:
        article = await self._get_article(article_id)
        if not access_policy.can_mutate_article(actor, article):
            raise ForbiddenError()
        if article.state == ArticleState.REMOVED:
            raise ConflictError("state", "This article has already been removed")

        article.enter_state(ArticleState.REMOVED)
        article.custom_uri = default_custom_uri()
        logger.info("Article %s removed by %s", article.id, actor.id)
        return await self._repository.update(article)

    # ── Images ──────────────────────────────────────────────────────

    async def save_image(
        self, article_id: str, kind: str, content: bytes, filename: str, actor: Actor
    ) -> str:
        image_kind = _parse_image_kind(kind)
        article = await self._get_article(article_id)
        if not access_policy.can_mutate_article(actor, article):
            raise ForbiddenError()

        try:
            url = await self._storage.store(content, filename)
        except Exception as exc:
            logger.exception("Could not store %s image for article %s", kind, article_id)
            raise DependencyError("image", "An error occurred while saving the image") from exc

        previous = article.image(image_kind)
        if previous:
            await self._discard_blob(previous)

        article.set_image(image_kind, url)
        await self._repository.update(article)
        return url

    async def remove_image(self, article_id: str, kind: str, actor: Actor) -> None:
        image_kind = _parse_image_kind(kind)
        article = await self._get_article(article_id)
        if not access_policy.can_mutate_article(actor, article):
            raise ForbiddenError()

        current = article.image(image_kind)
        if not current:
            raise ConflictError(image_kind.field_name, "Image already removed")

        await self._discard_blob(current)
        article.set_image(image_kind, None)
        await self._repository.update(article)

    async def _discard_blob(self, url: str) -> None:
        """Best-effort delete; a stale blob is acceptable, a failed request is not."""
        key = self._storage.key_from_url(url)
        if key is None:
            logger.warning("Not deleting %s: it does not belong to the image storage", url)
            return
        try:
            await self._storage.delete(url)
        except Exception:
            logger.exception("Error removing stored object %s", key)

    # ── Helpers ─────────────────────────────────────────────────────

    async def _get_article(self, article_id: str) -> Article:
        article = (
            await self._repository.get_by_id(article_id) if is_valid_id(article_id) else None
        )
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article


def _parse_state(value: str, allowed) -> ArticleState:
    try:
        state = ArticleState.from_string(value)
    except ValueError:
        raise InvalidInputError("state", "Invalid state") from None
    if state not in allowed:
        raise InvalidInputError("state", "Invalid state")
    return state


def _parse_image_kind(value: str) -> ImageKind:
    try:
        return ImageKind(value)
    except ValueError:
        raise InvalidInputError("type", "Invalid image type") from None
