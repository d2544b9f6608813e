"""Application service for per-user comment settings.

Settings carry a client cache hint (``ttl``, epoch milliseconds). A client that
presents an unexpired ttl is told its copy is still valid without any lookup.
"""

import logging
import time
from typing import Any

from content_desk.application.interfaces import CommentSettingsRepository, UserRepository
from content_desk.application.schemas import CommentSettingsUpdate
from content_desk.domain.entities import Actor, CommentListType, CommentSettings, SortOrder
from content_desk.domain.exceptions import EntityNotFoundError, ForbiddenError, InvalidInputError

logger = logging.getLogger(__name__)

NOT_MODIFIED = object()

_DAY_MS = 1000 * 60 * 60 * 24

_ENUM_FIELDS: dict[str, tuple[frozenset[str], str]] = {
    "answers_type": (frozenset(t.value for t in CommentListType), "Invalid answers type"),
    "type": (frozenset(t.value for t in CommentListType), "Invalid comments type"),
    "answers_order": (frozenset(o.value for o in SortOrder), "Invalid answers order"),
    "order": (frozenset(o.value for o in SortOrder), "Invalid comments order"),
}


def _now_ms() -> int:
    return int(time.time() * 1000)


class CommentSettingsService:
    """Reads and merges comment settings rows."""

    def __init__(
        self,
        repository: CommentSettingsRepository,
        users: UserRepository,
        ttl_days: int = 30,
        strict_notify_merge: bool = False,
    ):
        self._repository = repository
        self._users = users
        self._ttl_days = ttl_days
        self._strict_notify_merge = strict_notify_merge

    async def get_settings(self, actor: Actor, presented_ttl: int | None = None):
        """Return the actor's settings, or ``NOT_MODIFIED`` for an unexpired ttl."""
        if presented_ttl is not None and presented_ttl >= _now_ms():
            return NOT_MODIFIED

        await self._verify_user(actor)
        settings = await self._repository.get(actor.id)
        if settings is None:
            raise EntityNotFoundError("CommentSettings", actor.id)
        settings.notify = bool(settings.notify)
        return settings

    async def save_settings(self, actor: Actor, data: CommentSettingsUpdate) -> CommentSettings:
        """Create the row on first save, otherwise merge the patch into it.

        Without a definite ``notify`` in the patch the merged value falls back
        to the previous ``limit`` (long-standing stored behaviour, kept unless
        ``strict_notify_merge`` is on). Any non-zero limit therefore reads back
        as ``notify=True``.
        """
        patch = data.model_dump()
        _verify_enum_fields(patch)
        await self._verify_user(actor)

        current = await self._repository.get(actor.id)
        if current is None:
            await self._repository.create(CommentSettings(user_id=actor.id, **patch))
            logger.info("Comment settings created for %s", actor.id)
        else:
            if patch["notify"] is not None:
                notify = patch["notify"]
            elif self._strict_notify_merge:
                notify = current.notify
            else:
                notify = current.limit
            merged = CommentSettings(
                user_id=actor.id,
                limit=patch["limit"] or current.limit,
                notify=notify,
                order=patch["order"] or current.order,
                type=patch["type"] or current.type,
                answers_order=patch["answers_order"] or current.answers_order,
                answers_type=patch["answers_type"] or current.answers_type,
            )
            await self._repository.update(merged)

        settings = await self._repository.get(actor.id)
        settings.notify = bool(settings.notify)
        settings.ttl = _now_ms() + _DAY_MS * self._ttl_days
        return settings

    async def _verify_user(self, actor: Actor) -> None:
        user = await self._users.get_active(actor.id)
        if user is None:
            raise EntityNotFoundError("User", actor.id)
        if user.id != actor.id:
            raise ForbiddenError()


def _verify_enum_fields(patch: dict[str, Any]) -> None:
    for field_name, (allowed, message) in _ENUM_FIELDS.items():
        value = patch.get(field_name)
        if value and value not in allowed:
            raise InvalidInputError(field_name, message)
