from __future__ import annotations

from uuid import UUID

from classroom_service.application.dto.unread import ClassUnread, UnreadCounts
from classroom_service.application.uow import UnitOfWork
from classroom_service.domain.entities.content import ContentRef
from classroom_service.domain.entities.read_marker import ReadMarker
from classroom_service.domain.value_objects.enums import ContentKind


async def compute_unread_counts(user_id: UUID, uow: UnitOfWork) -> UnreadCounts:
    """Recompute unread classwork and announcements for every class of the user.

    Full recomputation: memberships, read markers and content refs are read
    fresh and diffed as sets. Classes without unread items still appear in
    ``by_class`` with zero counts.
    """
    class_ids = await uow.memberships.list_class_ids(user_id)
    if not class_ids:
        return UnreadCounts()

    markers = await uow.read_markers.list_for_user(user_id)
    read_classwork = {m.content_id for m in markers if m.content_type == ContentKind.CLASSWORK}
    read_announcements = {
        m.content_id for m in markers if m.content_type == ContentKind.ANNOUNCEMENT
    }

    classwork = await uow.content.list_classwork_refs(class_ids)
    announcements = await uow.content.list_announcement_refs(class_ids)

    unread_classwork = _count_unread_by_class(classwork, read_classwork)
    unread_announcements = _count_unread_by_class(announcements, read_announcements)

    by_class: dict[UUID, ClassUnread] = {}
    for class_id in class_ids:
        by_class[class_id] = ClassUnread(
            classwork=unread_classwork.get(class_id, 0),
            announcements=unread_announcements.get(class_id, 0),
        )

    return UnreadCounts(
        classwork=sum(c.classwork for c in by_class.values()),
        announcements=sum(c.announcements for c in by_class.values()),
        by_class=by_class,
    )


def _count_unread_by_class(refs: list[ContentRef], read_ids: set[UUID]) -> dict[UUID, int]:
    counts: dict[UUID, int] = {}
    for ref in refs:
        if ref.id in read_ids:
            continue
        counts[ref.class_id] = counts.get(ref.class_id, 0) + 1
    return counts


async def mark_as_read(
    user_id: UUID,
    content_id: UUID,
    kind: ContentKind,
    uow: UnitOfWork,
) -> None:
    await uow.read_markers_w.upsert(
        ReadMarker(user_id=user_id, content_id=content_id, content_type=kind.value)
    )
    await uow.commit()
