"""Per-connection chat view model: conversation list, totals and the open thread."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from classroom_service.application.dto.chat import ChatMessageView, ConversationView
from classroom_service.application.dto.events import ChangeEvent
from classroom_service.application.dto.principal import Principal
from classroom_service.application.exceptions import AppError
from classroom_service.application.ports.feed import ChangeFeed, EventSink, Subscription
from classroom_service.application.uow import UoWFactory
from classroom_service.domain.entities.conversation import Conversation
from classroom_service.domain.value_objects.enums import ChangeTable
from classroom_service.services import chat_service

logger = logging.getLogger(__name__)


class ChatSession:
    """Conversation list with unread counts plus the active conversation.

    Opening a conversation updates local state optimistically: its count is
    zeroed and the previous value subtracted from ``unread_total`` without
    waiting for a server recount. ``active_conversation`` only changes once the
    caller has been allowed to read the conversation and its messages loaded. Read failures are logged and leave the
    previous state in place; permission and validation errors propagate.
    """

    def __init__(
        self,
        principal: Principal,
        uow_factory: UoWFactory,
        sink: EventSink | None = None,
    ) -> None:
        self._principal = principal
        self._uow_factory = uow_factory
        self._sink = sink
        self._subscription: Subscription | None = None
        self._version = 0
        self._open_version = 0
        self.conversations: list[ConversationView] = []
        self.unread_total = 0
        self.active_conversation: UUID | None = None
        self.messages: list[ChatMessageView] = []
        self.loading = True
        self.messages_loading = False

    async def start(self, feed: ChangeFeed) -> None:
        self._subscription = feed.subscribe(ChangeTable.CHAT_MESSAGES, self._on_message)
        await self.fetch_conversations()

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

    async def fetch_conversations(self) -> list[ConversationView]:
        self._version += 1
        version = self._version
        try:
            async with self._uow_factory() as uow:
                views = await chat_service.list_conversations(self._principal.user_id, uow)
        except Exception:
            logger.exception("Error fetching conversations for %s", self._principal.user_id)
            return self.conversations
        finally:
            self.loading = False

        if version != self._version:
            logger.debug("Dropping stale conversation list v%d (latest v%d)", version, self._version)
            return self.conversations

        self.conversations = views
        self.unread_total = sum(c.unread_count for c in views)
        await self._emit("chat.conversations", self.conversations)
        return views

    async def open_conversation(self, conversation_id: UUID) -> list[ChatMessageView]:
        self._open_version += 1
        version = self._open_version
        self.messages_loading = True
        try:
            async with self._uow_factory() as uow:
                messages = await chat_service.open_conversation(
                    conversation_id, self._principal, uow,
                )
        except AppError:
            raise
        except Exception:
            logger.exception("Error fetching messages for conversation %s", conversation_id)
            return self.messages
        finally:
            if version == self._open_version:
                self.messages_loading = False

        # Marked read on the server even if a later open superseded this one
        self._zero_unread(conversation_id)
        if version != self._open_version:
            await self._emit("chat.conversations", self.conversations)
            return messages

        self.active_conversation = conversation_id
        self.messages = messages
        await self._emit("chat.messages", self.messages)
        await self._emit("chat.conversations", self.conversations)
        return messages

    def close_conversation(self) -> None:
        self._open_version += 1
        self.messages_loading = False
        self.active_conversation = None
        self.messages = []

    async def send_message(self, content: str, conversation_id: UUID) -> ChatMessageView | None:
        if not content.strip():
            return None
        try:
            async with self._uow_factory() as uow:
                msg = await chat_service.send_message(
                    conversation_id, self._principal, content, uow,
                )
        except AppError:
            raise
        except Exception:
            logger.exception("Error sending message to conversation %s", conversation_id)
            return None
        return ChatMessageView.from_message(msg)

    async def create_conversation(
        self,
        participant_ids: list[UUID],
        title: str | None = None,
        class_id: UUID | None = None,
    ) -> Conversation:
        async with self._uow_factory() as uow:
            conversation = await chat_service.create_conversation(
                self._principal, participant_ids, title, class_id, uow,
            )
        await self.fetch_conversations()
        return conversation

    def _zero_unread(self, conversation_id: UUID) -> None:
        previous = 0
        updated: list[ConversationView] = []
        for conv in self.conversations:
            if conv.id == conversation_id:
                previous = conv.unread_count
                conv = conv.with_unread(0)
            updated.append(conv)
        self.conversations = updated
        self.unread_total = max(self.unread_total - previous, 0)

    async def _on_message(self, event: ChangeEvent) -> None:
        message = _message_from_record(event.record)

        if self.active_conversation == message.conversation_id:
            self.messages = [*self.messages, message]
            await self._emit("chat.message", message)

        if not await self._involves_me(message.conversation_id):
            return
        await self.fetch_conversations()

    async def _involves_me(self, conversation_id: UUID) -> bool:
        if any(c.id == conversation_id for c in self.conversations):
            return True
        # Possibly a conversation someone else just created with us
        async with self._uow_factory() as uow:
            return await uow.participants.is_participant(
                conversation_id, self._principal.user_id,
            )

    async def _emit(self, event_type: str, payload: Any) -> None:
        if self._sink is not None:
            await self._sink(event_type, payload)


def _message_from_record(record: dict[str, Any]) -> ChatMessageView:
    created_at = record["created_at"]
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at)
    return ChatMessageView(
        id=UUID(str(record["id"])),
        conversation_id=UUID(str(record["conversation_id"])),
        sender_id=UUID(str(record["sender_id"])),
        content=record.get("content") or "",
        created_at=created_at,
        attachments=list(record.get("attachments") or []),
    )
