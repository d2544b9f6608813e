"""Port for the append-only comment statistics table."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from content_desk.domain.entities import StatRecord


class StatRecordRepository(ABC):
    @abstractmethod
    async def add(self, record: StatRecord) -> StatRecord:
        """Append a row; rows are never updated in place."""
        ...

    @abstractmethod
    async def get_latest(self, reference: str | None) -> StatRecord | None:
        """Newest row for a user, or the platform row when ``reference`` is None."""
        ...

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Scope whose writes are undone on error while the surrounding transaction stays usable."""
        yield
