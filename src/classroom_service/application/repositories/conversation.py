from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.conversation import Conversation


class ConversationReader(Protocol):
    async def get_by_id(self, conversation_id: UUID) -> Conversation | None: ...

    async def list_by_ids(self, conversation_ids: list[UUID]) -> list[Conversation]:
        """Return conversations ordered by updated_at, newest first."""
        ...


class ConversationWriter(Protocol):
    async def create(self, conversation: Conversation) -> Conversation: ...

    async def touch_updated_at(self, conversation_id: UUID, ts: datetime) -> None: ...
