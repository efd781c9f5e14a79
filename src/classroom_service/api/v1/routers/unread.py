from __future__ import annotations

from fastapi import APIRouter

from classroom_service.api.deps import CurrentPrincipal, UoWDep
from classroom_service.api.v1.schemas.unread import MarkReadRequest, UnreadCountsResponse
from classroom_service.application.dto.unread import UnreadCounts
from classroom_service.services import unread_service

router = APIRouter(prefix="/api/v1/unread", tags=["unread"])


@router.get("", response_model=UnreadCountsResponse)
async def get_unread_counts(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> UnreadCountsResponse:
    if not principal.is_student:
        return UnreadCountsResponse.model_validate(UnreadCounts(), from_attributes=True)
    counts = await unread_service.compute_unread_counts(principal.user_id, uow)
    return UnreadCountsResponse.model_validate(counts, from_attributes=True)


@router.post("/read", response_model=UnreadCountsResponse)
async def mark_as_read(
    body: MarkReadRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> UnreadCountsResponse:
    await unread_service.mark_as_read(principal.user_id, body.content_id, body.content_type, uow)
    if not principal.is_student:
        return UnreadCountsResponse.model_validate(UnreadCounts(), from_attributes=True)
    counts = await unread_service.compute_unread_counts(principal.user_id, uow)
    return UnreadCountsResponse.model_validate(counts, from_attributes=True)
