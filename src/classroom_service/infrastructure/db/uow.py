from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from classroom_service.infrastructure.db.repositories.content import (
    ContentReaderRepo,
    ContentWriterRepo,
)
from classroom_service.infrastructure.db.repositories.conversation import (
    ConversationReaderRepo,
    ConversationWriterRepo,
)
from classroom_service.infrastructure.db.repositories.membership import (
    MembershipReaderRepo,
    MembershipWriterRepo,
)
from classroom_service.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from classroom_service.infrastructure.db.repositories.outbox import OutboxWriterRepo
from classroom_service.infrastructure.db.repositories.participant import (
    ParticipantReaderRepo,
    ParticipantWriterRepo,
)
from classroom_service.infrastructure.db.repositories.profile import ProfileReaderRepo
from classroom_service.infrastructure.db.repositories.read_marker import (
    ReadMarkerReaderRepo,
    ReadMarkerWriterRepo,
)
from classroom_service.infrastructure.db.repositories.school_class import ClassReaderRepo
from classroom_service.infrastructure.db.session import AsyncSessionLocal


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.classes = ClassReaderRepo(session)
        self.memberships = MembershipReaderRepo(session)
        self.memberships_w = MembershipWriterRepo(session)
        self.content = ContentReaderRepo(session)
        self.content_w = ContentWriterRepo(session)
        self.read_markers = ReadMarkerReaderRepo(session)
        self.read_markers_w = ReadMarkerWriterRepo(session)
        self.profiles = ProfileReaderRepo(session)
        self.conversations = ConversationReaderRepo(session)
        self.conversations_w = ConversationWriterRepo(session)
        self.participants = ParticipantReaderRepo(session)
        self.participants_w = ParticipantWriterRepo(session)
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)
        self.outbox = OutboxWriterRepo(session)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()


@asynccontextmanager
async def open_uow() -> AsyncIterator[SqlAlchemyUoW]:
    """Session-scoped unit of work for code running outside a request."""
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            yield uow
