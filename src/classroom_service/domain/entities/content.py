from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ClassworkItem:
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


@dataclass(frozen=True, slots=True)
class Announcement:
    id: UUID
    class_id: UUID
    author_id: UUID | None
    content: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class ContentRef:
    """Identity of a content item plus the class that owns it."""

    id: UUID
    class_id: UUID
