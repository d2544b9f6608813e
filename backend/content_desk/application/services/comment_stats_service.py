"""Read access to the comment rollup series."""

from content_desk.application.interfaces import StatRecordRepository
from content_desk.domain.entities import StatRecord


class CommentStatsService:
    def __init__(self, repository: StatRecordRepository):
        self._repository = repository

    async def get_latest(self, reference: str | None = None) -> StatRecord | None:
        """Most recent row for a user, or for the whole platform when ``reference`` is None."""
        return await self._repository.get_latest(reference)
