from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.read_marker import ReadMarker
from classroom_service.infrastructure.db.models.read_marker import NotificationReadModel


class ReadMarkerReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(self, user_id: UUID) -> list[ReadMarker]:
        stmt = select(
            NotificationReadModel.content_id,
            NotificationReadModel.content_type,
        ).where(NotificationReadModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return [
            ReadMarker(user_id=user_id, content_id=row.content_id, content_type=row.content_type)
            for row in result.all()
        ]


class ReadMarkerWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def upsert(self, marker: ReadMarker) -> None:
        stmt = (
            pg_insert(NotificationReadModel)
            .values(
                user_id=marker.user_id,
                content_id=marker.content_id,
                content_type=marker.content_type,
            )
            .on_conflict_do_nothing(constraint="uq_notification_read")
        )
        await self._session.execute(stmt)
