from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from classroom_service.domain.value_objects.enums import ClassworkType


class PostClassworkRequest(BaseModel):
    title: str = Field(min_length=1)
    type: ClassworkType = ClassworkType.LESSON
    content: str | None = None
    topic_id: UUID | None = None
    due_date: datetime | None = None
    points: int | None = Field(default=None, ge=0)


class PostAnnouncementRequest(BaseModel):
    content: str = Field(min_length=1)


class JoinClassRequest(BaseModel):
    class_code: str = Field(min_length=1, max_length=32)


class ClassworkResponse(BaseModel):
    id: UUID
    class_id: UUID
    topic_id: UUID | None
    type: str
    title: str
    content: str | None
    due_date: datetime | None
    points: int | None
    created_by: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class AnnouncementResponse(BaseModel):
    id: UUID
    class_id: UUID
    author_id: UUID | None
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ClassResponse(BaseModel):
    id: UUID
    name: str
    section: str | None
    subject: str | None
    class_code: str

    model_config = {"from_attributes": True}
