"""Port for the comment_settings table."""

from abc import ABC, abstractmethod

from content_desk.domain.entities import CommentSettings


class CommentSettingsRepository(ABC):
    @abstractmethod
    async def get(self, user_id: str) -> CommentSettings | None:
        ...

    @abstractmethod
    async def create(self, settings: CommentSettings) -> None:
        """Insert a row; fields left as None take the storage default."""
        ...

    @abstractmethod
    async def update(self, settings: CommentSettings) -> None:
        ...
