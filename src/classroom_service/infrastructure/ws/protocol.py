"""WebSocket message envelope models."""
from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from classroom_service.domain.value_objects.enums import ContentKind


class WsInbound(BaseModel):
    """Client → Server."""

    # ping | unread.refresh | unread.mark_read | notifications.refresh
    # chat.refresh | chat.open | chat.close | chat.send
    type: str
    data: dict[str, Any] = {}


class WsOutbound(BaseModel):
    """Server → Client."""

    # pong | unread.updated | notification | chat.conversations
    # chat.messages | chat.message | error
    type: str
    data: Any = None


class MarkReadData(BaseModel):
    content_id: UUID
    content_type: ContentKind


class ConversationRefData(BaseModel):
    conversation_id: UUID


class ChatSendData(BaseModel):
    conversation_id: UUID
    content: str


def error_frame(code: str, **extra: Any) -> str:
    return WsOutbound(type="error", data={"code": code, **extra}).model_dump_json()
