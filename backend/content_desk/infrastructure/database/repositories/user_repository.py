"""Read-only user lookups backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from content_desk.application.interfaces import UserRepository
from content_desk.domain.entities import UserAccount
from content_desk.infrastructure.database.models import UserModel


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> UserAccount:
        return UserAccount(
            id=model.id,
            name=model.name,
            email=model.email,
            is_admin=model.is_admin,
            is_author=model.is_author,
            custom_url=model.custom_url,
            profile_photo=model.profile_photo,
            deleted_at=model.deleted_at,
            created_at=model.created_at,
        )

    async def get_active(self, user_id: str) -> UserAccount | None:
        stmt = select(UserModel).where(UserModel.id == user_id, UserModel.deleted_at.is_(None))
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_active(self) -> list[UserAccount]:
        stmt = select(UserModel).where(UserModel.deleted_at.is_(None)).order_by(UserModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
