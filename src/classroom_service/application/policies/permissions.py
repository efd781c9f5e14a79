from __future__ import annotations

from classroom_service.application.dto.principal import Principal
from classroom_service.application.exceptions import ForbiddenError, NotFoundError
from classroom_service.application.repositories.membership import MembershipReader
from classroom_service.application.repositories.participant import ParticipantReader
from classroom_service.domain.entities.conversation import Conversation
from classroom_service.domain.entities.school_class import SchoolClass


async def assert_conversation_access(
    principal: Principal,
    conversation: Conversation | None,
    participants: ParticipantReader,
) -> Conversation:
    """Raise if conversation doesn't exist or principal has no read access."""
    if conversation is None:
        raise NotFoundError("Conversation not found")

    # Admins can read every conversation
    if principal.is_admin:
        return conversation

    return await assert_participant(principal, conversation, participants)


async def assert_participant(
    principal: Principal,
    conversation: Conversation | None,
    participants: ParticipantReader,
) -> Conversation:
    """Writes require actual membership, admins included."""
    if conversation is None:
        raise NotFoundError("Conversation not found")

    if not await participants.is_participant(conversation.id, principal.user_id):
        raise ForbiddenError("Not a participant of this conversation")

    return conversation


async def assert_can_post(
    principal: Principal,
    school_class: SchoolClass | None,
    memberships: MembershipReader,
) -> SchoolClass:
    """Only admins and the class's teachers may post content to it."""
    if school_class is None:
        raise NotFoundError("Class not found")

    if principal.is_admin:
        return school_class

    if not await memberships.is_teacher(school_class.id, principal.user_id):
        raise ForbiddenError("Only teachers of this class can post to it")

    return school_class
