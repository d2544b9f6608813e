"""Append-only comment rollup rows in the stats store."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction

from content_desk.application.interfaces import StatRecordRepository
from content_desk.domain.entities import StatRecord
from content_desk.infrastructure.database.models import CommentStatModel


class SQLAlchemyStatRecordRepository(StatRecordRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def savepoint(self) -> AsyncSessionTransaction:
        """SAVEPOINT on the stats session; a failed row rolls back alone."""
        return self._session.begin_nested()

    def _to_entity(self, model: CommentStatModel) -> StatRecord:
        return StatRecord(
            id=model.id,
            month=model.month,
            year=model.year,
            count=model.count,
            reference=model.reference,
            created_at=model.created_at,
        )

    async def add(self, record: StatRecord) -> StatRecord:
        model = CommentStatModel(
            month=record.month,
            year=record.year,
            count=record.count,
            reference=record.reference,
            created_at=record.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def get_latest(self, reference: str | None) -> StatRecord | None:
        stmt = select(CommentStatModel)
        if reference is None:
            stmt = stmt.where(CommentStatModel.reference.is_(None))
        else:
            stmt = stmt.where(CommentStatModel.reference == reference)
        stmt = stmt.order_by(CommentStatModel.id.desc()).limit(1)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None
