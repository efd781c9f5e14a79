from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.content import (
    Announcement,
    ClassworkItem,
    ContentRef,
)
from classroom_service.infrastructure.db.mappers import content as mapper
from classroom_service.infrastructure.db.models.content import (
    AnnouncementModel,
    ClassworkItemModel,
)


class ContentReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_classwork_refs(self, class_ids: list[UUID]) -> list[ContentRef]:
        if not class_ids:
            return []
        stmt = select(ClassworkItemModel.id, ClassworkItemModel.class_id).where(
            ClassworkItemModel.class_id.in_(class_ids)
        )
        result = await self._session.execute(stmt)
        return [ContentRef(id=row.id, class_id=row.class_id) for row in result.all()]

    async def list_announcement_refs(self, class_ids: list[UUID]) -> list[ContentRef]:
        if not class_ids:
            return []
        stmt = select(AnnouncementModel.id, AnnouncementModel.class_id).where(
            AnnouncementModel.class_id.in_(class_ids)
        )
        result = await self._session.execute(stmt)
        return [ContentRef(id=row.id, class_id=row.class_id) for row in result.all()]


class ContentWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_classwork(self, item: ClassworkItem) -> ClassworkItem:
        model = mapper.classwork_to_model(item)
        self._session.add(model)
        await self._session.flush()
        return mapper.classwork_to_entity(model)

    async def add_announcement(self, announcement: Announcement) -> Announcement:
        model = mapper.announcement_to_model(announcement)
        self._session.add(model)
        await self._session.flush()
        return mapper.announcement_to_entity(model)
