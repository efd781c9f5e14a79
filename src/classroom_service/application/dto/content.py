from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from classroom_service.domain.value_objects.enums import ClassworkType


@dataclass(frozen=True, slots=True)
class PostClassworkDTO:
    class_id: UUID
    title: str
    type: ClassworkType = ClassworkType.LESSON
    content: str | None = None
    topic_id: UUID | None = None
    due_date: datetime | None = None
    points: int | None = None
