from __future__ import annotations

from classroom_service.domain.entities.school_class import SchoolClass
from classroom_service.infrastructure.db.models.school_class import ClassModel


def model_to_entity(model: ClassModel) -> SchoolClass:
    return SchoolClass(
        id=model.id,
        name=model.name,
        section=model.section,
        subject=model.subject,
        class_code=model.class_code,
        created_by=model.created_by,
        created_at=model.created_at,
    )
