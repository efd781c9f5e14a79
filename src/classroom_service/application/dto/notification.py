from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class NotificationAction:
    label: str
    link: str


@dataclass(frozen=True, slots=True)
class Notification:
    """Transient, dismissible notice about new content in a class."""

    title: str
    description: str
    class_id: UUID
    content_id: UUID
    content_type: str
    action: NotificationAction
    duration_ms: int
