from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from classroom_service.api.deps import CurrentPrincipal, UoWDep
from classroom_service.api.v1.schemas.conversation import MarkConversationReadResponse
from classroom_service.api.v1.schemas.message import MessageResponse, SendMessageRequest
from classroom_service.services import chat_service

router = APIRouter(prefix="/api/v1/chat/conversations", tags=["messages"])


@router.get("/{conversation_id}/messages", response_model=list[MessageResponse])
async def list_messages(
    conversation_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[MessageResponse]:
    """Message history, oldest first. Opening a thread marks it read."""
    messages = await chat_service.open_conversation(conversation_id, principal, uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    conversation_id: UUID,
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await chat_service.send_message(conversation_id, principal, body.content, uow)
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.post("/{conversation_id}/read", response_model=MarkConversationReadResponse)
async def mark_read(
    conversation_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MarkConversationReadResponse:
    last_read_at = await chat_service.mark_conversation_read(conversation_id, principal, uow)
    return MarkConversationReadResponse(
        conversation_id=conversation_id,
        last_read_at=last_read_at,
    )
