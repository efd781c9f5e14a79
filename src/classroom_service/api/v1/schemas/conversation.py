from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from classroom_service.api.v1.schemas.message import MessageResponse


class CreateConversationRequest(BaseModel):
    participant_ids: list[UUID] = Field(min_length=1)
    title: str | None = None
    class_id: UUID | None = None


class ParticipantResponse(BaseModel):
    user_id: UUID
    full_name: str | None
    avatar_url: str | None

    model_config = {"from_attributes": True}


class ConversationResponse(BaseModel):
    id: UUID
    title: str | None
    is_direct: bool
    class_id: UUID | None
    created_at: datetime
    updated_at: datetime
    participants: list[ParticipantResponse] = []
    last_message: MessageResponse | None = None
    unread_count: int = 0

    model_config = {"from_attributes": True}


class MarkConversationReadResponse(BaseModel):
    conversation_id: UUID
    last_read_at: datetime
