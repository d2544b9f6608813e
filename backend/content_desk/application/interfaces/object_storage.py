"""Port for binary object storage (article images)."""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    @abstractmethod
    async def store(self, content: bytes, filename: str) -> str:
        """Persist a blob and return its public URL."""
        ...

    @abstractmethod
    async def delete(self, url: str) -> bool:
        """Delete the blob behind ``url``. Returns False when nothing was there."""
        ...

    @abstractmethod
    def key_from_url(self, url: str) -> str | None:
        """Map a public URL back to its storage key; None when it is not ours."""
        ...
