"""Seed development data: a class with a teacher, two students, content and a chat."""
from __future__ import annotations

import argparse
import asyncio
import logging
import uuid

from classroom_service.application.dto.content import PostClassworkDTO
from classroom_service.application.dto.principal import Principal
from classroom_service.domain.value_objects.enums import AppRole, ClassworkType
from classroom_service.infrastructure.db.base import Base
from classroom_service.infrastructure.db.models.profile import ProfileModel
from classroom_service.infrastructure.db.models.school_class import ClassModel, ClassTeacherModel
from classroom_service.infrastructure.db.session import AsyncSessionLocal, engine
from classroom_service.infrastructure.db.uow import SqlAlchemyUoW
from classroom_service.services import chat_service, content_service

logger = logging.getLogger(__name__)


async def create_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema created")


async def seed() -> None:
    teacher = Principal(user_id=uuid.uuid4(), roles=[AppRole.TEACHER])
    alice = Principal(user_id=uuid.uuid4(), roles=[AppRole.STUDENT])
    bob = Principal(user_id=uuid.uuid4(), roles=[AppRole.STUDENT])
    class_id = uuid.uuid4()
    class_code = uuid.uuid4().hex[:6].upper()

    async with AsyncSessionLocal() as session:
        session.add_all(
            [
                ProfileModel(user_id=teacher.user_id, email="teacher@example.com", full_name="Ms. Rivera"),
                ProfileModel(user_id=alice.user_id, email="alice@example.com", full_name="Alice"),
                ProfileModel(user_id=bob.user_id, email="bob@example.com", full_name="Bob"),
                ClassModel(
                    id=class_id,
                    name="Biology 101",
                    section="A",
                    subject="Biology",
                    class_code=class_code,
                    created_by=teacher.user_id,
                ),
            ]
        )
        await session.flush()
        session.add(ClassTeacherModel(class_id=class_id, teacher_id=teacher.user_id))
        await session.commit()

        uow = SqlAlchemyUoW(session)
        await content_service.join_class(alice, class_code, uow)
        await content_service.join_class(bob, class_code, uow)

        await content_service.post_classwork(
            teacher,
            PostClassworkDTO(class_id=class_id, title="Cell structure", type=ClassworkType.LESSON),
            uow,
        )
        await content_service.post_classwork(
            teacher,
            PostClassworkDTO(
                class_id=class_id,
                title="Lab report: osmosis",
                type=ClassworkType.ASSIGNMENT,
                points=20,
            ),
            uow,
        )
        await content_service.post_announcement(
            teacher, class_id, "Welcome to Biology 101! Bring your lab coats on Monday.", uow,
        )

        conv = await chat_service.create_conversation(
            alice, [bob.user_id], None, class_id, uow,
        )
        await chat_service.send_message(conv.id, alice, "Did you start the lab report?", uow)
        await chat_service.send_message(conv.id, bob, "Not yet, tonight maybe.", uow)

    logger.info("Seeded class %s (code %s)", class_id, class_code)
    logger.info("Teacher %s, students %s and %s", teacher.user_id, alice.user_id, bob.user_id)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--create-schema", action="store_true", help="create tables first")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    async def _run() -> None:
        if args.create_schema:
            await create_schema()
        await seed()

    asyncio.run(_run())


if __name__ == "__main__":
    main()
