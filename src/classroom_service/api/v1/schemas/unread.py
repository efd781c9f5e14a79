from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from classroom_service.domain.value_objects.enums import ContentKind


class ClassUnreadResponse(BaseModel):
    classwork: int
    announcements: int
    total: int

    model_config = {"from_attributes": True}


class UnreadCountsResponse(BaseModel):
    classwork: int
    announcements: int
    total: int
    by_class: dict[UUID, ClassUnreadResponse]

    model_config = {"from_attributes": True}


class MarkReadRequest(BaseModel):
    content_id: UUID
    content_type: ContentKind
