from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from classroom_service.application.dto.content import PostClassworkDTO
from classroom_service.application.dto.principal import Principal
from classroom_service.application.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from classroom_service.application.policies.permissions import assert_can_post
from classroom_service.application.uow import UnitOfWork
from classroom_service.domain.entities.content import Announcement, ClassworkItem
from classroom_service.domain.entities.membership import ClassMembership
from classroom_service.domain.entities.school_class import SchoolClass
from classroom_service.domain.value_objects.enums import ChangeTable
from classroom_service.services._payloads import row_payload

logger = logging.getLogger(__name__)


async def post_classwork(
    principal: Principal,
    dto: PostClassworkDTO,
    uow: UnitOfWork,
) -> ClassworkItem:
    school_class = await uow.classes.get_by_id(dto.class_id)
    await assert_can_post(principal, school_class, uow.memberships)

    title = dto.title.strip()
    if not title:
        raise ValidationError("Title is required")

    item = ClassworkItem(
        id=uuid.uuid4(),
        class_id=dto.class_id,
        topic_id=dto.topic_id,
        type=dto.type.value,
        title=title,
        content=dto.content,
        due_date=dto.due_date,
        points=dto.points,
        created_by=principal.user_id,
        created_at=datetime.now(timezone.utc),
    )
    item = await uow.content_w.add_classwork(item)
    await uow.outbox.add(f"{ChangeTable.CLASSWORK_ITEMS}.insert", row_payload(item))
    await uow.commit()
    logger.info("Classwork %s (%s) posted to class %s", item.id, item.type, item.class_id)
    return item


async def post_announcement(
    principal: Principal,
    class_id: uuid.UUID,
    content: str,
    uow: UnitOfWork,
) -> Announcement:
    school_class = await uow.classes.get_by_id(class_id)
    await assert_can_post(principal, school_class, uow.memberships)

    content = content.strip()
    if not content:
        raise ValidationError("Announcement content is required")

    announcement = Announcement(
        id=uuid.uuid4(),
        class_id=class_id,
        author_id=principal.user_id,
        content=content,
        created_at=datetime.now(timezone.utc),
    )
    announcement = await uow.content_w.add_announcement(announcement)
    await uow.outbox.add(f"{ChangeTable.ANNOUNCEMENTS}.insert", row_payload(announcement))
    await uow.commit()
    logger.info("Announcement %s posted to class %s", announcement.id, class_id)
    return announcement


async def join_class(
    principal: Principal,
    class_code: str,
    uow: UnitOfWork,
) -> SchoolClass:
    """Enrol the caller as a student of the class identified by its code."""
    school_class = await uow.classes.get_by_code(class_code.strip().upper())
    if school_class is None:
        raise NotFoundError("Class not found. Please check the code and try again.")

    if await uow.memberships.is_member(school_class.id, principal.user_id):
        raise ConflictError("You are already a member of this class.")

    membership = ClassMembership(
        class_id=school_class.id,
        student_id=principal.user_id,
        joined_at=datetime.now(timezone.utc),
    )
    await uow.memberships_w.add(membership)
    await uow.outbox.add(f"{ChangeTable.CLASS_MEMBERS}.insert", row_payload(membership))
    await uow.commit()
    logger.info("User %s joined class %s", principal.user_id, school_class.id)
    return school_class
