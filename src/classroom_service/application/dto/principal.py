from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from classroom_service.domain.value_objects.enums import AppRole


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity extracted from JWT."""

    user_id: UUID
    roles: list[str] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return AppRole.ADMIN in self.roles

    @property
    def is_teacher(self) -> bool:
        return AppRole.TEACHER in self.roles

    @property
    def is_student(self) -> bool:
        return AppRole.STUDENT in self.roles

    @property
    def principal_key(self) -> str:
        """Unique key for WS connection registry."""
        return str(self.user_id)
