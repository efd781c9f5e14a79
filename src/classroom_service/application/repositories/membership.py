from __future__ import annotations

from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.membership import ClassMembership


class MembershipReader(Protocol):
    async def list_class_ids(self, student_id: UUID) -> list[UUID]: ...

    async def is_member(self, class_id: UUID, student_id: UUID) -> bool: ...

    async def is_teacher(self, class_id: UUID, teacher_id: UUID) -> bool: ...


class MembershipWriter(Protocol):
    async def add(self, membership: ClassMembership) -> None: ...
