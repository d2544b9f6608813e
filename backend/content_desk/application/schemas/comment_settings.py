"""Pydantic DTOs for comment settings."""

from pydantic import BaseModel

from content_desk.domain.entities import CommentSettings


class CommentSettingsUpdate(BaseModel):
    """Partial settings update — enum values are checked by the service."""

    type: str | None = None
    order: str | None = None
    answers_type: str | None = None
    answers_order: str | None = None
    limit: int | None = None
    notify: bool | None = None


class CommentSettingsResponse(BaseModel):
    user_id: str
    type: str | None = None
    order: str | None = None
    answers_type: str | None = None
    answers_order: str | None = None
    limit: int | None = None
    notify: bool
    ttl: int | None = None

    @classmethod
    def from_entity(cls, settings: CommentSettings) -> "CommentSettingsResponse":
        return cls(
            user_id=settings.user_id,
            type=settings.type,
            order=settings.order,
            answers_type=settings.answers_type,
            answers_order=settings.answers_order,
            limit=settings.limit,
            notify=bool(settings.notify),
            ttl=settings.ttl,
        )
