from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.message import Message
from classroom_service.infrastructure.db.mappers import message as mapper
from classroom_service.infrastructure.db.models.message import MessageModel
from classroom_service.infrastructure.db.models.participant import ParticipantModel

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_messages(self, conversation_id: UUID) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def last_messages(self, conversation_ids: list[UUID]) -> dict[UUID, Message]:
        if not conversation_ids:
            return {}
        stmt = (
            select(MessageModel)
            .where(MessageModel.conversation_id.in_(conversation_ids))
            .distinct(MessageModel.conversation_id)
            .order_by(MessageModel.conversation_id, MessageModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return {m.conversation_id: mapper.model_to_entity(m) for m in result.scalars().all()}

    async def unread_counts(self, user_id: UUID) -> dict[UUID, int]:
        # One grouped statement: last_read_at and the message count come
        # from the same snapshot.
        stmt = (
            select(MessageModel.conversation_id, func.count(MessageModel.id))
            .join(
                ParticipantModel,
                and_(
                    ParticipantModel.conversation_id == MessageModel.conversation_id,
                    ParticipantModel.user_id == user_id,
                ),
            )
            .where(
                MessageModel.sender_id != user_id,
                MessageModel.created_at > func.coalesce(ParticipantModel.last_read_at, _EPOCH),
            )
            .group_by(MessageModel.conversation_id)
        )
        result = await self._session.execute(stmt)
        return {conversation_id: count for conversation_id, count in result.all()}


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)
