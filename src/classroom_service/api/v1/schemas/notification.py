from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class NotificationActionResponse(BaseModel):
    label: str
    link: str

    model_config = {"from_attributes": True}


class NotificationResponse(BaseModel):
    title: str
    description: str
    class_id: UUID
    content_id: UUID
    content_type: str
    action: NotificationActionResponse
    duration_ms: int

    model_config = {"from_attributes": True}
