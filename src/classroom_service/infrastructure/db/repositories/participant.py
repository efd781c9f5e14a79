from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.participant import Participant
from classroom_service.infrastructure.db.mappers import conversation as mapper
from classroom_service.infrastructure.db.models.participant import ParticipantModel


class ParticipantReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def is_participant(self, conversation_id: UUID, user_id: UUID) -> bool:
        stmt = (
            select(ParticipantModel.id)
            .where(
                ParticipantModel.conversation_id == conversation_id,
                ParticipantModel.user_id == user_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_for_user(self, user_id: UUID) -> list[Participant]:
        stmt = select(ParticipantModel).where(ParticipantModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return [mapper.participant_to_entity(m) for m in result.scalars().all()]

    async def list_for_conversations(self, conversation_ids: list[UUID]) -> list[Participant]:
        if not conversation_ids:
            return []
        stmt = (
            select(ParticipantModel)
            .where(ParticipantModel.conversation_id.in_(conversation_ids))
            .order_by(ParticipantModel.joined_at.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.participant_to_entity(m) for m in result.scalars().all()]


class ParticipantWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add_many(self, participants: list[Participant]) -> None:
        self._session.add_all([mapper.participant_to_model(p) for p in participants])
        await self._session.flush()

    async def set_last_read_at(self, conversation_id: UUID, user_id: UUID, ts: datetime) -> None:
        stmt = (
            update(ParticipantModel)
            .where(
                ParticipantModel.conversation_id == conversation_id,
                ParticipantModel.user_id == user_id,
            )
            .values(last_read_at=ts)
        )
        await self._session.execute(stmt)
