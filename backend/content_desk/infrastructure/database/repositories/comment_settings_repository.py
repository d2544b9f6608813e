"""comment_settings rows in the stats store."""

from sqlalchemy.ext.asyncio import AsyncSession

from content_desk.application.interfaces import CommentSettingsRepository
from content_desk.domain.entities import CommentSettings
from content_desk.infrastructure.database.models import CommentSettingsModel

_COLUMNS = ("type", "order", "answers_type", "answers_order", "limit", "notify")


class SQLAlchemyCommentSettingsRepository(CommentSettingsRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, user_id: str) -> CommentSettings | None:
        model = await self._session.get(CommentSettingsModel, user_id)
        if model is None:
            return None
        return CommentSettings(user_id=model.user_id, **{c: getattr(model, c) for c in _COLUMNS})

    async def create(self, settings: CommentSettings) -> None:
        supplied = {c: _column_value(settings, c) for c in _COLUMNS}
        model = CommentSettingsModel(
            user_id=settings.user_id,
            **{c: v for c, v in supplied.items() if v is not None},
        )
        self._session.add(model)
        await self._session.flush()

    async def update(self, settings: CommentSettings) -> None:
        model = await self._session.get(CommentSettingsModel, settings.user_id)
        if model is None:
            raise ValueError(f"Comment settings for {settings.user_id} not found in database")
        for column in _COLUMNS:
            value = _column_value(settings, column)
            if value is not None:
                setattr(model, column, value)
        await self._session.flush()


def _column_value(settings: CommentSettings, column: str):
    value = getattr(settings, column)
    if column == "notify" and value is not None:
        return int(value)
    return value
