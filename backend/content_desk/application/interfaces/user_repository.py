"""Port for reading platform users."""

from abc import ABC, abstractmethod

from content_desk.domain.entities import UserAccount


class UserRepository(ABC):
    @abstractmethod
    async def get_active(self, user_id: str) -> UserAccount | None:
        """Return the user unless missing or soft-deleted."""
        ...

    @abstractmethod
    async def list_active(self) -> list[UserAccount]:
        """Return every user that is not soft-deleted."""
        ...
