from __future__ import annotations

from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.message import Message


class MessageReader(Protocol):
    async def list_messages(self, conversation_id: UUID) -> list[Message]:
        """All messages of a conversation, oldest first."""
        ...

    async def last_messages(
        self, conversation_ids: list[UUID]
    ) -> dict[UUID, Message]: ...

    async def unread_counts(self, user_id: UUID) -> dict[UUID, int]:
        """Per conversation, messages from others newer than the user's last_read_at.

        Conversations without unread messages may be absent from the result.
        """
        ...


class MessageWriter(Protocol):
    async def create(self, message: Message) -> Message: ...
