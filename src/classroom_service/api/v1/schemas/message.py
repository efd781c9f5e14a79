from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    content: str = Field(min_length=1)


class SenderResponse(BaseModel):
    full_name: str | None
    avatar_url: str | None

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    content: str
    attachments: list[Any] = []
    created_at: datetime
    sender: SenderResponse | None = None

    model_config = {"from_attributes": True}
