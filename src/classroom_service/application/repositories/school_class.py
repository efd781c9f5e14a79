from __future__ import annotations

from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.school_class import SchoolClass


class ClassReader(Protocol):
    async def get_by_id(self, class_id: UUID) -> SchoolClass | None: ...

    async def get_by_code(self, class_code: str) -> SchoolClass | None: ...

    async def get_name(self, class_id: UUID) -> str | None:
        """Return the display name only, or None if the class is gone."""
        ...
