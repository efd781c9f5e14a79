from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.school_class import SchoolClass
from classroom_service.infrastructure.db.mappers import school_class as mapper
from classroom_service.infrastructure.db.models.school_class import ClassModel


class ClassReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, class_id: UUID) -> SchoolClass | None:
        result = await self._session.get(ClassModel, class_id)
        return mapper.model_to_entity(result) if result else None

    async def get_by_code(self, class_code: str) -> SchoolClass | None:
        stmt = select(ClassModel).where(ClassModel.class_code == class_code)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def get_name(self, class_id: UUID) -> str | None:
        stmt = select(ClassModel.name).where(ClassModel.id == class_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
