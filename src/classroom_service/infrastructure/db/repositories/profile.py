from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.profile import Profile
from classroom_service.infrastructure.db.mappers import profile as mapper
from classroom_service.infrastructure.db.models.profile import ProfileModel


class ProfileReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_by_user_ids(self, user_ids: list[UUID]) -> list[Profile]:
        if not user_ids:
            return []
        stmt = select(ProfileModel).where(ProfileModel.user_id.in_(user_ids))
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]
