"""Turn content insert events into user-facing notifications."""
from __future__ import annotations

from typing import Any
from uuid import UUID

from classroom_service.application.dto.events import ChangeEvent
from classroom_service.application.dto.notification import Notification, NotificationAction
from classroom_service.application.uow import UnitOfWork
from classroom_service.config import settings
from classroom_service.domain.value_objects.enums import (
    ChangeTable,
    ClassworkType,
    ContentKind,
)

FALLBACK_CLASS_NAME = "your class"


async def resolve_class_name(class_id: UUID, uow: UnitOfWork) -> str:
    name = await uow.classes.get_name(class_id)
    return name or FALLBACK_CLASS_NAME


def event_class_id(event: ChangeEvent) -> UUID | None:
    raw = event.record.get("class_id")
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        return None


def build_notification(event: ChangeEvent, class_name: str) -> Notification | None:
    """Build the notification for a content insert, or None for other tables."""
    if event.table == ChangeTable.CLASSWORK_ITEMS:
        return _classwork_notification(event.record, class_name)
    if event.table == ChangeTable.ANNOUNCEMENTS:
        return _announcement_notification(event.record, class_name)
    return None


def _classwork_notification(record: dict[str, Any], class_name: str) -> Notification:
    item_id = UUID(str(record["id"]))
    is_assignment = record.get("type") == ClassworkType.ASSIGNMENT
    return Notification(
        title="New Assignment" if is_assignment else "New Material",
        description=f"{record.get('title') or 'New content'} in {class_name}",
        class_id=UUID(str(record["class_id"])),
        content_id=item_id,
        content_type=ContentKind.CLASSWORK,
        action=NotificationAction(
            label="View",
            link=f"/assignment/{item_id}" if is_assignment else f"/material/{item_id}",
        ),
        duration_ms=settings.NOTIFICATION_DURATION_MS,
    )


def _announcement_notification(record: dict[str, Any], class_name: str) -> Notification:
    class_id = UUID(str(record["class_id"]))
    return Notification(
        title="New Announcement",
        description=f"{preview(record.get('content'))} in {class_name}",
        class_id=class_id,
        content_id=UUID(str(record["id"])),
        content_type=ContentKind.ANNOUNCEMENT,
        action=NotificationAction(label="View", link=f"/class/{class_id}"),
        duration_ms=settings.NOTIFICATION_DURATION_MS,
    )


def preview(content: str | None) -> str:
    if not content:
        return "New announcement"
    limit = settings.NOTIFICATION_PREVIEW_CHARS
    if len(content) > limit:
        return content[:limit] + "..."
    return content
