"""Concrete repository implementation for per-user state backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.application.interfaces import UserStateRepository
from sitebuilder.infrastructure.database.models import UserStateModel


class SQLAlchemyUserStateRepository(UserStateRepository):
    """Implements the UserStateRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _find(self, user_id: str, key: str) -> UserStateModel | None:
        stmt = select(UserStateModel).where(
            UserStateModel.user_id == user_id,
            UserStateModel.key == key,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, user_id: str, key: str) -> str | None:
        model = await self._find(user_id, key)
        return model.value if model else None

    async def set(self, user_id: str, key: str, value: str) -> None:
        model = await self._find(user_id, key)
        if model is None:
            self._session.add(UserStateModel(user_id=user_id, key=key, value=value))
        else:
            model.value = value
            model.updated_at = datetime.now(timezone.utc)
        await self._session.flush()

    async def delete(self, user_id: str, key: str) -> bool:
        model = await self._find(user_id, key)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
