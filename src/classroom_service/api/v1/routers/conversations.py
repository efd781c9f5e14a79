from __future__ import annotations

from fastapi import APIRouter

from classroom_service.api.deps import CurrentPrincipal, UoWDep
from classroom_service.api.v1.schemas.conversation import (
    ConversationResponse,
    CreateConversationRequest,
)
from classroom_service.services import chat_service

router = APIRouter(prefix="/api/v1/chat/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[ConversationResponse]:
    views = await chat_service.list_conversations(principal.user_id, uow)
    return [ConversationResponse.model_validate(v, from_attributes=True) for v in views]


@router.post("", response_model=ConversationResponse, status_code=201)
async def create_conversation(
    body: CreateConversationRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ConversationResponse:
    conv = await chat_service.create_conversation(
        principal, body.participant_ids, body.title, body.class_id, uow,
    )
    return ConversationResponse.model_validate(conv, from_attributes=True)
