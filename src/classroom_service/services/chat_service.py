from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from classroom_service.application.dto.chat import (
    ChatMessageView,
    ConversationView,
    ParticipantView,
    SenderView,
)
from classroom_service.application.dto.principal import Principal
from classroom_service.application.exceptions import ValidationError
from classroom_service.application.policies.permissions import (
    assert_conversation_access,
    assert_participant,
)
from classroom_service.application.uow import UnitOfWork
from classroom_service.domain.entities.conversation import Conversation
from classroom_service.domain.entities.message import Message
from classroom_service.domain.entities.participant import Participant
from classroom_service.domain.value_objects.enums import ChangeTable
from classroom_service.services._payloads import row_payload

logger = logging.getLogger(__name__)


async def list_conversations(user_id: uuid.UUID, uow: UnitOfWork) -> list[ConversationView]:
    """Build the conversation list of a user, newest activity first.

    Unread counts come from a single grouped query rather than one count
    per conversation.
    """
    memberships = await uow.participants.list_for_user(user_id)
    if not memberships:
        return []

    conversation_ids = [p.conversation_id for p in memberships]
    conversations = await uow.conversations.list_by_ids(conversation_ids)
    if not conversations:
        return []

    participants = await uow.participants.list_for_conversations(conversation_ids)
    user_ids = list({p.user_id for p in participants})
    profiles = {p.user_id: p for p in await uow.profiles.list_by_user_ids(user_ids)}
    last_messages = await uow.messages.last_messages(conversation_ids)
    unread = await uow.messages.unread_counts(user_id)

    views: list[ConversationView] = []
    for conv in conversations:
        others = []
        for p in participants:
            if p.conversation_id != conv.id or p.user_id == user_id:
                continue
            profile = profiles.get(p.user_id)
            others.append(
                ParticipantView(
                    user_id=p.user_id,
                    full_name=profile.full_name if profile else None,
                    avatar_url=profile.avatar_url if profile else None,
                )
            )
        last = last_messages.get(conv.id)
        views.append(
            ConversationView(
                id=conv.id,
                title=conv.title,
                is_direct=conv.is_direct,
                class_id=conv.class_id,
                created_at=conv.created_at,
                updated_at=conv.updated_at,
                participants=others,
                last_message=ChatMessageView.from_message(last) if last else None,
                unread_count=unread.get(conv.id, 0),
            )
        )
    return views


async def list_messages(
    conversation_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> list[ChatMessageView]:
    conversation = await uow.conversations.get_by_id(conversation_id)
    await assert_conversation_access(principal, conversation, uow.participants)

    messages = await uow.messages.list_messages(conversation_id)
    sender_ids = list({m.sender_id for m in messages})
    profiles = {p.user_id: p for p in await uow.profiles.list_by_user_ids(sender_ids)}
    return [
        ChatMessageView.from_message(m, SenderView.from_profile(profiles.get(m.sender_id)))
        for m in messages
    ]


async def mark_conversation_read(
    conversation_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> datetime:
    conversation = await uow.conversations.get_by_id(conversation_id)
    await assert_participant(principal, conversation, uow.participants)

    now = datetime.now(timezone.utc)
    await uow.participants_w.set_last_read_at(conversation_id, principal.user_id, now)
    await uow.commit()
    return now


async def open_conversation(
    conversation_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> list[ChatMessageView]:
    """Load the message list and, for participants, mark the conversation read.

    Admins may view conversations they are not part of; those views leave
    no read state behind.
    """
    messages = await list_messages(conversation_id, principal, uow)
    if await uow.participants.is_participant(conversation_id, principal.user_id):
        await mark_conversation_read(conversation_id, principal, uow)
    return messages


async def send_message(
    conversation_id: uuid.UUID,
    principal: Principal,
    content: str,
    uow: UnitOfWork,
) -> Message:
    """Insert a message. No acknowledgement or ordering beyond insertion order."""
    content = content.strip()
    if not content:
        raise ValidationError("Message content is required")

    conversation = await uow.conversations.get_by_id(conversation_id)
    await assert_participant(principal, conversation, uow.participants)

    msg = Message(
        id=uuid.uuid4(),
        conversation_id=conversation_id,
        sender_id=principal.user_id,
        content=content,
        created_at=datetime.now(timezone.utc),
    )
    msg = await uow.messages_w.create(msg)
    await uow.conversations_w.touch_updated_at(conversation_id, msg.created_at)
    await uow.outbox.add(f"{ChangeTable.CHAT_MESSAGES}.insert", row_payload(msg))
    await uow.commit()
    return msg


async def create_conversation(
    principal: Principal,
    participant_ids: list[uuid.UUID],
    title: str | None,
    class_id: uuid.UUID | None,
    uow: UnitOfWork,
) -> Conversation:
    if not participant_ids:
        raise ValidationError("At least one participant is required")

    now = datetime.now(timezone.utc)
    conversation = Conversation(
        id=uuid.uuid4(),
        title=title or None,
        is_direct=len(participant_ids) == 1,
        class_id=class_id,
        created_at=now,
        updated_at=now,
    )
    conversation = await uow.conversations_w.create(conversation)

    members = list(dict.fromkeys([principal.user_id, *participant_ids]))
    await uow.participants_w.add_many(
        [
            Participant(conversation_id=conversation.id, user_id=user_id, joined_at=now)
            for user_id in members
        ]
    )
    await uow.commit()
    logger.info(
        "Conversation %s created by %s with %d participants",
        conversation.id, principal.user_id, len(members),
    )
    return conversation
