from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.domain.entities.membership import ClassMembership
from classroom_service.infrastructure.db.models.school_class import (
    ClassMemberModel,
    ClassTeacherModel,
)


class MembershipReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_class_ids(self, student_id: UUID) -> list[UUID]:
        stmt = (
            select(ClassMemberModel.class_id)
            .where(ClassMemberModel.student_id == student_id)
            .order_by(ClassMemberModel.joined_at.asc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def is_member(self, class_id: UUID, student_id: UUID) -> bool:
        stmt = (
            select(ClassMemberModel.id)
            .where(
                ClassMemberModel.class_id == class_id,
                ClassMemberModel.student_id == student_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def is_teacher(self, class_id: UUID, teacher_id: UUID) -> bool:
        stmt = (
            select(ClassTeacherModel.id)
            .where(
                ClassTeacherModel.class_id == class_id,
                ClassTeacherModel.teacher_id == teacher_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None


class MembershipWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, membership: ClassMembership) -> None:
        self._session.add(
            ClassMemberModel(
                class_id=membership.class_id,
                student_id=membership.student_id,
                joined_at=membership.joined_at,
            )
        )
        await self._session.flush()
