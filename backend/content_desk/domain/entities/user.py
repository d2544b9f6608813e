"""Domain entities for platform users and the authenticated actor."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Actor:
    """Already-authenticated identity performing a request."""

    id: str
    is_admin: bool = False
    is_author: bool = False
    email: str = ""
    name: str = ""


@dataclass
class AuthorSnapshot:
    """Public projection of a user — never carries credential fields."""

    id: str
    name: str
    email: str | None = None
    is_admin: bool = False
    is_author: bool = False
    custom_url: str | None = None
    profile_photo: str | None = None

    @classmethod
    def from_actor(cls, actor: Actor) -> "AuthorSnapshot":
        return cls(
            id=actor.id,
            name=actor.name,
            email=actor.email,
            is_admin=actor.is_admin,
            is_author=actor.is_author,
        )


@dataclass
class UserAccount:
    """Persisted platform user as seen by the core (credentials omitted)."""

    id: str
    name: str
    email: str
    is_admin: bool = False
    is_author: bool = False
    custom_url: str | None = None
    profile_photo: str | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
