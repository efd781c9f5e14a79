from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.conversation import Conversation
from classroom_service.infrastructure.db.mappers import conversation as mapper
from classroom_service.infrastructure.db.models.conversation import ConversationModel


class ConversationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, conversation_id: UUID) -> Conversation | None:
        result = await self._session.get(ConversationModel, conversation_id)
        return mapper.model_to_entity(result) if result else None

    async def list_by_ids(self, conversation_ids: list[UUID]) -> list[Conversation]:
        if not conversation_ids:
            return []
        stmt = (
            select(ConversationModel)
            .where(ConversationModel.id.in_(conversation_ids))
            .order_by(ConversationModel.updated_at.desc(), ConversationModel.id)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ConversationWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, conversation: Conversation) -> Conversation:
        model = mapper.entity_to_model(conversation)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def touch_updated_at(self, conversation_id: UUID, ts: datetime) -> None:
        stmt = (
            update(ConversationModel)
            .where(ConversationModel.id == conversation_id)
            .values(updated_at=ts)
        )
        await self._session.execute(stmt)
