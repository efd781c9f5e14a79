from __future__ import annotations

from classroom_service.domain.entities.content import Announcement, ClassworkItem
from classroom_service.infrastructure.db.models.content import (
    AnnouncementModel,
    ClassworkItemModel,
)


def classwork_to_entity(model: ClassworkItemModel) -> ClassworkItem:
    return ClassworkItem(
        id=model.id,
        class_id=model.class_id,
        topic_id=model.topic_id,
        type=model.type,
        title=model.title,
        content=model.content,
        due_date=model.due_date,
        points=model.points,
        created_by=model.created_by,
        created_at=model.created_at,
    )


def classwork_to_model(entity: ClassworkItem) -> ClassworkItemModel:
    return ClassworkItemModel(
        id=entity.id,
        class_id=entity.class_id,
        topic_id=entity.topic_id,
        type=entity.type,
        title=entity.title,
        content=entity.content,
        due_date=entity.due_date,
        points=entity.points,
        created_by=entity.created_by,
        created_at=entity.created_at,
    )


def announcement_to_entity(model: AnnouncementModel) -> Announcement:
    return Announcement(
        id=model.id,
        class_id=model.class_id,
        author_id=model.author_id,
        content=model.content,
        created_at=model.created_at,
    )


def announcement_to_model(entity: Announcement) -> AnnouncementModel:
    return AnnouncementModel(
        id=entity.id,
        class_id=entity.class_id,
        author_id=entity.author_id,
        content=entity.content,
        created_at=entity.created_at,
    )
