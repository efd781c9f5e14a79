"""Shared test fixtures."""
from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator
from uuid import UUID

import pytest

from classroom_service.application.dto.principal import Principal
from classroom_service.application.repositories.outbox import OutboxRecord
from classroom_service.domain.entities.content import Announcement, ClassworkItem, ContentRef
from classroom_service.domain.entities.conversation import Conversation
from classroom_service.domain.entities.membership import ClassMembership
from classroom_service.domain.entities.message import Message
from classroom_service.domain.entities.participant import Participant
from classroom_service.domain.entities.profile import Profile
from classroom_service.domain.entities.read_marker import ReadMarker
from classroom_service.domain.entities.school_class import SchoolClass
from classroom_service.domain.value_objects.enums import AppRole, ClassworkType, OutboxStatus

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def student_principal() -> Principal:
    return Principal(user_id=uuid.uuid4(), roles=[AppRole.STUDENT])


@pytest.fixture
def teacher_principal() -> Principal:
    return Principal(user_id=uuid.uuid4(), roles=[AppRole.TEACHER])


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id=uuid.uuid4(), roles=[AppRole.ADMIN])


def _now() -> datetime:
    return datetime.now(timezone.utc)


def make_class(*, name: str = "Biology 101", class_code: str = "ABC123") -> SchoolClass:
    return SchoolClass(
        id=uuid.uuid4(),
        name=name,
        section=None,
        subject=None,
        class_code=class_code,
        created_by=None,
        created_at=_now(),
    )


def make_classwork(
    class_id: UUID,
    *,
    type: str = ClassworkType.LESSON,
    title: str = "Cells",
) -> ClassworkItem:
    return ClassworkItem(
        id=uuid.uuid4(),
        class_id=class_id,
        topic_id=None,
        type=type,
        title=title,
        content=None,
        due_date=None,
        points=None,
        created_by=None,
        created_at=_now(),
    )


def make_announcement(class_id: UUID, *, content: str = "Hello class") -> Announcement:
    return Announcement(
        id=uuid.uuid4(),
        class_id=class_id,
        author_id=None,
        content=content,
        created_at=_now(),
    )


def make_conversation(
    *,
    conversation_id: UUID | None = None,
    title: str | None = None,
    is_direct: bool = True,
    updated_at: datetime | None = None,
) -> Conversation:
    now = _now()
    return Conversation(
        id=conversation_id or uuid.uuid4(),
        title=title,
        is_direct=is_direct,
        class_id=None,
        created_at=now,
        updated_at=updated_at or now,
    )


def make_message(
    conversation_id: UUID,
    sender_id: UUID,
    *,
    content: str = "hello",
    created_at: datetime | None = None,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        conversation_id=conversation_id,
        sender_id=sender_id,
        content=content,
        created_at=created_at or _now(),
    )


@dataclass
class FakeStore:
    """Rows shared by every FakeUoW opened over it."""

    classes: dict[UUID, SchoolClass] = field(default_factory=dict)
    teachers: set[tuple[UUID, UUID]] = field(default_factory=set)
    members: list[ClassMembership] = field(default_factory=list)
    classwork: list[ClassworkItem] = field(default_factory=list)
    announcements: list[Announcement] = field(default_factory=list)
    markers: set[ReadMarker] = field(default_factory=set)
    profiles: dict[UUID, Profile] = field(default_factory=dict)
    conversations: dict[UUID, Conversation] = field(default_factory=dict)
    participants: list[Participant] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)
    outbox: list[dict[str, Any]] = field(default_factory=list)

    def add_class(self, school_class: SchoolClass, *, teacher_id: UUID | None = None) -> SchoolClass:
        self.classes[school_class.id] = school_class
        if teacher_id is not None:
            self.teachers.add((school_class.id, teacher_id))
        return school_class

    def enrol(self, class_id: UUID, student_id: UUID) -> None:
        self.members.append(ClassMembership(class_id=class_id, student_id=student_id, joined_at=_now()))

    def add_conversation(self, conversation: Conversation, *user_ids: UUID) -> Conversation:
        self.conversations[conversation.id] = conversation
        for user_id in user_ids:
            self.participants.append(
                Participant(conversation_id=conversation.id, user_id=user_id, joined_at=conversation.created_at)
            )
        return conversation

    def last_read_at(self, conversation_id: UUID, user_id: UUID) -> datetime | None:
        for p in self.participants:
            if p.conversation_id == conversation_id and p.user_id == user_id:
                return p.last_read_at
        return None


@dataclass
class FakeClassReader:
    _store: FakeStore

    async def get_by_id(self, class_id: UUID) -> SchoolClass | None:
        return self._store.classes.get(class_id)

    async def get_by_code(self, class_code: str) -> SchoolClass | None:
        for c in self._store.classes.values():
            if c.class_code == class_code:
                return c
        return None

    async def get_name(self, class_id: UUID) -> str | None:
        c = self._store.classes.get(class_id)
        return c.name if c else None


@dataclass
class FakeMembershipReader:
    _store: FakeStore

    async def list_class_ids(self, student_id: UUID) -> list[UUID]:
        return [m.class_id for m in self._store.members if m.student_id == student_id]

    async def is_member(self, class_id: UUID, student_id: UUID) -> bool:
        return any(m.class_id == class_id and m.student_id == student_id for m in self._store.members)

    async def is_teacher(self, class_id: UUID, teacher_id: UUID) -> bool:
        return (class_id, teacher_id) in self._store.teachers


@dataclass
class FakeMembershipWriter:
    _store: FakeStore

    async def add(self, membership: ClassMembership) -> None:
        self._store.members.append(membership)


@dataclass
class FakeContentReader:
    _store: FakeStore

    async def list_classwork_refs(self, class_ids: list[UUID]) -> list[ContentRef]:
        return [ContentRef(id=c.id, class_id=c.class_id) for c in self._store.classwork if c.class_id in class_ids]

    async def list_announcement_refs(self, class_ids: list[UUID]) -> list[ContentRef]:
        return [
            ContentRef(id=a.id, class_id=a.class_id)
            for a in self._store.announcements
            if a.class_id in class_ids
        ]


@dataclass
class FakeContentWriter:
    _store: FakeStore

    async def add_classwork(self, item: ClassworkItem) -> ClassworkItem:
        self._store.classwork.append(item)
        return item

    async def add_announcement(self, announcement: Announcement) -> Announcement:
        self._store.announcements.append(announcement)
        return announcement


@dataclass
class FakeReadMarkerReader:
    _store: FakeStore

    async def list_for_user(self, user_id: UUID) -> list[ReadMarker]:
        return [m for m in self._store.markers if m.user_id == user_id]


@dataclass
class FakeReadMarkerWriter:
    _store: FakeStore

    async def upsert(self, marker: ReadMarker) -> None:
        self._store.markers.add(marker)


@dataclass
class FakeProfileReader:
    _store: FakeStore

    async def list_by_user_ids(self, user_ids: list[UUID]) -> list[Profile]:
        return [self._store.profiles[u] for u in user_ids if u in self._store.profiles]


@dataclass
class FakeConversationReader:
    _store: FakeStore

    async def get_by_id(self, conversation_id: UUID) -> Conversation | None:
        return self._store.conversations.get(conversation_id)

    async def list_by_ids(self, conversation_ids: list[UUID]) -> list[Conversation]:
        convs = [c for c in self._store.conversations.values() if c.id in conversation_ids]
        return sorted(convs, key=lambda c: c.updated_at, reverse=True)


@dataclass
class FakeConversationWriter:
    _store: FakeStore

    async def create(self, conversation: Conversation) -> Conversation:
        self._store.conversations[conversation.id] = conversation
        return conversation

    async def touch_updated_at(self, conversation_id: UUID, ts: datetime) -> None:
        conv = self._store.conversations[conversation_id]
        self._store.conversations[conversation_id] = replace(conv, updated_at=ts)


@dataclass
class FakeParticipantReader:
    _store: FakeStore

    async def is_participant(self, conversation_id: UUID, user_id: UUID) -> bool:
        return any(
            p.conversation_id == conversation_id and p.user_id == user_id
            for p in self._store.participants
        )

    async def list_for_user(self, user_id: UUID) -> list[Participant]:
        return [p for p in self._store.participants if p.user_id == user_id]

    async def list_for_conversations(self, conversation_ids: list[UUID]) -> list[Participant]:
        return [p for p in self._store.participants if p.conversation_id in conversation_ids]


@dataclass
class FakeParticipantWriter:
    _store: FakeStore

    async def add_many(self, participants: list[Participant]) -> None:
        self._store.participants.extend(participants)

    async def set_last_read_at(self, conversation_id: UUID, user_id: UUID, ts: datetime) -> None:
        self._store.participants = [
            replace(p, last_read_at=ts)
            if p.conversation_id == conversation_id and p.user_id == user_id
            else p
            for p in self._store.participants
        ]


@dataclass
class FakeMessageReader:
    _store: FakeStore

    async def list_messages(self, conversation_id: UUID) -> list[Message]:
        msgs = [m for m in self._store.messages if m.conversation_id == conversation_id]
        return sorted(msgs, key=lambda m: m.created_at)

    async def last_messages(self, conversation_ids: list[UUID]) -> dict[UUID, Message]:
        last: dict[UUID, Message] = {}
        for m in self._store.messages:
            if m.conversation_id not in conversation_ids:
                continue
            current = last.get(m.conversation_id)
            if current is None or m.created_at > current.created_at:
                last[m.conversation_id] = m
        return last

    async def unread_counts(self, user_id: UUID) -> dict[UUID, int]:
        counts: dict[UUID, int] = {}
        for p in self._store.participants:
            if p.user_id != user_id:
                continue
            since = p.last_read_at or EPOCH
            n = sum(
                1
                for m in self._store.messages
                if m.conversation_id == p.conversation_id
                and m.sender_id != user_id
                and m.created_at > since
            )
            if n:
                counts[p.conversation_id] = n
        return counts


@dataclass
class FakeMessageWriter:
    _store: FakeStore

    async def create(self, message: Message) -> Message:
        self._store.messages.append(message)
        return message


@dataclass
class FakeOutboxWriter:
    _store: FakeStore

    @property
    def _records(self) -> list[dict[str, Any]]:
        return self._store.outbox

    async def add(self, event_type: str, payload: dict[str, Any]) -> None:
        self._store.outbox.append(
            {
                "id": len(self._store.outbox) + 1,
                "event_type": event_type,
                "payload": payload,
                "status": OutboxStatus.PENDING,
                "attempts": 0,
                "next_retry_at": None,
            }
        )

    async def fetch_pending(self, batch_size: int) -> list[OutboxRecord]:
        batch = [
            r for r in self._store.outbox
            if r["status"] in (OutboxStatus.PENDING, OutboxStatus.FAILED)
        ][:batch_size]
        for r in batch:
            r["status"] = OutboxStatus.PROCESSING
        return [OutboxRecord(r["id"], r["event_type"], r["payload"], r["attempts"]) for r in batch]

    async def mark_sent(self, ids: list[int]) -> None:
        for r in self._store.outbox:
            if r["id"] in ids:
                r["status"] = OutboxStatus.SENT

    async def mark_failed(self, record_id: int, next_retry_at: datetime) -> None:
        for r in self._store.outbox:
            if r["id"] == record_id:
                r["status"] = OutboxStatus.FAILED
                r["attempts"] += 1
                r["next_retry_at"] = next_retry_at


class FakeUoW:
    """In-memory UoW for unit tests."""

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self.classes = FakeClassReader(self.store)
        self.memberships = FakeMembershipReader(self.store)
        self.memberships_w = FakeMembershipWriter(self.store)
        self.content = FakeContentReader(self.store)
        self.content_w = FakeContentWriter(self.store)
        self.read_markers = FakeReadMarkerReader(self.store)
        self.read_markers_w = FakeReadMarkerWriter(self.store)
        self.profiles = FakeProfileReader(self.store)
        self.conversations = FakeConversationReader(self.store)
        self.conversations_w = FakeConversationWriter(self.store)
        self.participants = FakeParticipantReader(self.store)
        self.participants_w = FakeParticipantWriter(self.store)
        self.messages = FakeMessageReader(self.store)
        self.messages_w = FakeMessageWriter(self.store)
        self.outbox = FakeOutboxWriter(self.store)
        self._committed = False

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self._committed = True

    async def rollback(self) -> None:
        pass


def fake_uow_factory(store: FakeStore):
    """Callable matching UoWFactory: each call opens a FakeUoW over ``store``."""

    @asynccontextmanager
    async def _open() -> AsyncIterator[FakeUoW]:
        yield FakeUoW(store)

    return _open


def failing_uow_factory(exc: Exception):
    @asynccontextmanager
    async def _open() -> AsyncIterator[FakeUoW]:
        raise exc
        yield  # pragma: no cover

    return _open


class RecordingSink:
    """EventSink that keeps every pushed (event_type, payload) pair."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    async def __call__(self, event_type: str, payload: Any) -> None:
        self.events.append((event_type, payload))

    def of_type(self, event_type: str) -> list[Any]:
        return [p for t, p in self.events if t == event_type]


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


def minutes_ago(n: int) -> datetime:
    return _now() - timedelta(minutes=n)
