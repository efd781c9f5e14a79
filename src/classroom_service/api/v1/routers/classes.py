from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter

from classroom_service.api.deps import CurrentPrincipal, UoWDep
from classroom_service.api.v1.schemas.content import (
    AnnouncementResponse,
    ClassResponse,
    ClassworkResponse,
    JoinClassRequest,
    PostAnnouncementRequest,
    PostClassworkRequest,
)
from classroom_service.application.dto.content import PostClassworkDTO
from classroom_service.services import content_service

router = APIRouter(prefix="/api/v1/classes", tags=["classes"])


@router.post("/join", response_model=ClassResponse, status_code=201)
async def join_class(
    body: JoinClassRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ClassResponse:
    school_class = await content_service.join_class(principal, body.class_code, uow)
    return ClassResponse.model_validate(school_class, from_attributes=True)


@router.post("/{class_id}/classwork", response_model=ClassworkResponse, status_code=201)
async def post_classwork(
    class_id: UUID,
    body: PostClassworkRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ClassworkResponse:
    dto = PostClassworkDTO(
        class_id=class_id,
        title=body.title,
        type=body.type,
        content=body.content,
        topic_id=body.topic_id,
        due_date=body.due_date,
        points=body.points,
    )
    item = await content_service.post_classwork(principal, dto, uow)
    return ClassworkResponse.model_validate(item, from_attributes=True)


@router.post("/{class_id}/announcements", response_model=AnnouncementResponse, status_code=201)
async def post_announcement(
    class_id: UUID,
    body: PostAnnouncementRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> AnnouncementResponse:
    announcement = await content_service.post_announcement(principal, class_id, body.content, uow)
    return AnnouncementResponse.model_validate(announcement, from_attributes=True)
