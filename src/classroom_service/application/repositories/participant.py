from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.participant import Participant


class ParticipantReader(Protocol):
    async def is_participant(self, conversation_id: UUID, user_id: UUID) -> bool: ...

    async def list_for_user(self, user_id: UUID) -> list[Participant]:
        """Memberships of the user, one per conversation, with last_read_at."""
        ...

    async def list_for_conversations(
        self, conversation_ids: list[UUID]
    ) -> list[Participant]: ...


class ParticipantWriter(Protocol):
    async def add_many(self, participants: list[Participant]) -> None: ...

    async def set_last_read_at(
        self, conversation_id: UUID, user_id: UUID, ts: datetime
    ) -> None: ...
