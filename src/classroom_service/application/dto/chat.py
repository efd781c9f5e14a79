from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from classroom_service.domain.entities.message import Message
from classroom_service.domain.entities.profile import Profile


@dataclass(frozen=True, slots=True)
class SenderView:
    full_name: str | None
    avatar_url: str | None

    @classmethod
    def from_profile(cls, profile: Profile | None) -> SenderView | None:
        if profile is None:
            return None
        return cls(full_name=profile.full_name, avatar_url=profile.avatar_url)


@dataclass(frozen=True, slots=True)
class ParticipantView:
    user_id: UUID
    full_name: str | None
    avatar_url: str | None


@dataclass(frozen=True, slots=True)
class ChatMessageView:
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime
    attachments: list[Any] = field(default_factory=list)
    sender: SenderView | None = None

    @classmethod
    def from_message(
        cls, message: Message, sender: SenderView | None = None,
    ) -> ChatMessageView:
        return cls(
            id=message.id,
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=message.created_at,
            attachments=list(message.attachments or []),
            sender=sender,
        )


@dataclass(frozen=True, slots=True)
class ConversationView:
    id: UUID
    title: str | None
    is_direct: bool
    class_id: UUID | None
    created_at: datetime
    updated_at: datetime
    participants: list[ParticipantView] = field(default_factory=list)
    last_message: ChatMessageView | None = None
    unread_count: int = 0

    def with_unread(self, unread_count: int) -> ConversationView:
        return replace(self, unread_count=unread_count)
