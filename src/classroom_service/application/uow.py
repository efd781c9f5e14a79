from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol

from classroom_service.application.repositories.content import (
    ContentReader,
    ContentWriter,
)
from classroom_service.application.repositories.conversation import (
    ConversationReader,
    ConversationWriter,
)
from classroom_service.application.repositories.membership import (
    MembershipReader,
    MembershipWriter,
)
from classroom_service.application.repositories.message import MessageReader, MessageWriter
from classroom_service.application.repositories.outbox import OutboxWriter
from classroom_service.application.repositories.participant import (
    ParticipantReader,
    ParticipantWriter,
)
from classroom_service.application.repositories.profile import ProfileReader
from classroom_service.application.repositories.read_marker import (
    ReadMarkerReader,
    ReadMarkerWriter,
)
from classroom_service.application.repositories.school_class import ClassReader


class UnitOfWork(Protocol):
    classes: ClassReader
    memberships: MembershipReader
    memberships_w: MembershipWriter
    content: ContentReader
    content_w: ContentWriter
    read_markers: ReadMarkerReader
    read_markers_w: ReadMarkerWriter
    profiles: ProfileReader
    conversations: ConversationReader
    conversations_w: ConversationWriter
    participants: ParticipantReader
    participants_w: ParticipantWriter
    messages: MessageReader
    messages_w: MessageWriter
    outbox: OutboxWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...


# Opens a fresh unit of work per call; used by long-lived per-connection trackers.
UoWFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]
