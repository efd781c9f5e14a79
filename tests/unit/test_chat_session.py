from __future__ import annotations

import asyncio
import uuid
from contextlib import asynccontextmanager

import pytest

from classroom_service.application.dto.events import ChangeEvent
from classroom_service.application.exceptions import ForbiddenError
from classroom_service.domain.value_objects.enums import ChangeTable
from classroom_service.infrastructure.bus.change_feed import InProcessChangeFeed
from classroom_service.realtime.chat_session import ChatSession
from classroom_service.services._payloads import row_payload
from tests.conftest import (
    FakeUoW,
    failing_uow_factory,
    fake_uow_factory,
    make_conversation,
    make_message,
    minutes_ago,
)


@pytest.fixture
def peer_id():
    return uuid.uuid4()


@pytest.fixture
def chats(store, student_principal, peer_id):
    """Conversation A with 3 unread messages, B with 2."""
    conv_a = store.add_conversation(make_conversation(updated_at=minutes_ago(1)), student_principal.user_id, peer_id)
    conv_b = store.add_conversation(make_conversation(updated_at=minutes_ago(2)), student_principal.user_id, peer_id)
    store.messages += [make_message(conv_a.id, peer_id, created_at=minutes_ago(i)) for i in (5, 4, 3)]
    store.messages += [make_message(conv_b.id, peer_id, created_at=minutes_ago(i)) for i in (5, 4)]
    return conv_a, conv_b


def _insert_event(message) -> ChangeEvent:
    return ChangeEvent(table=ChangeTable.CHAT_MESSAGES, type="insert", record=row_payload(message))


@pytest.mark.asyncio
async def test_start_loads_conversations(store, sink, student_principal, chats):
    feed = InProcessChangeFeed()
    session = ChatSession(student_principal, fake_uow_factory(store), sink)

    await session.start(feed)

    assert session.loading is False
    assert session.unread_total == 5
    assert feed.listener_count(ChangeTable.CHAT_MESSAGES) == 1
    assert len(sink.of_type("chat.conversations")[-1]) == 2


@pytest.mark.asyncio
async def test_open_conversation_zeroes_and_subtracts(store, sink, student_principal, chats):
    conv_a, conv_b = chats
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.fetch_conversations()

    messages = await session.open_conversation(conv_a.id)

    assert len(messages) == 3
    assert session.active_conversation == conv_a.id
    assert session.unread_total == 2
    counts = {c.id: c.unread_count for c in session.conversations}
    assert counts == {conv_a.id: 0, conv_b.id: 2}
    assert store.last_read_at(conv_a.id, student_principal.user_id) is not None
    assert len(sink.of_type("chat.messages")[-1]) == 3


@pytest.mark.asyncio
async def test_open_forbidden_conversation_raises(store, sink, teacher_principal, peer_id, chats):
    conv_a, _ = chats
    feed = InProcessChangeFeed()
    session = ChatSession(teacher_principal, fake_uow_factory(store), sink)
    await session.start(feed)

    with pytest.raises(ForbiddenError):
        await session.open_conversation(conv_a.id)

    incoming = make_message(conv_a.id, peer_id, content="hello")
    store.messages.append(incoming)
    await feed.publish(_insert_event(incoming))

    assert session.messages_loading is False
    assert session.active_conversation is None
    assert session.messages == []
    assert sink.of_type("chat.message") == []


@pytest.mark.asyncio
async def test_failed_open_keeps_current_thread(store, sink, student_principal, peer_id, chats):
    conv_a, conv_b = chats
    feed = InProcessChangeFeed()
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.start(feed)
    await session.open_conversation(conv_a.id)
    thread = session.messages

    session._uow_factory = failing_uow_factory(ConnectionError("down"))
    result = await session.open_conversation(conv_b.id)
    session._uow_factory = fake_uow_factory(store)

    incoming = make_message(conv_b.id, peer_id)
    store.messages.append(incoming)
    await feed.publish(_insert_event(incoming))

    assert result is thread
    assert session.active_conversation == conv_a.id
    assert session.messages == thread
    assert all(m.conversation_id == conv_a.id for m in session.messages)
    assert session.messages_loading is False


@pytest.mark.asyncio
async def test_superseded_open_still_zeroes_unread(store, sink, student_principal, chats):
    conv_a, conv_b = chats
    gate = asyncio.Event()
    calls = 0

    @asynccontextmanager
    async def factory():
        nonlocal calls
        calls += 1
        if calls == 2:
            await gate.wait()
        yield FakeUoW(store)

    session = ChatSession(student_principal, factory, sink)
    await session.fetch_conversations()
    slow = asyncio.create_task(session.open_conversation(conv_a.id))
    await asyncio.sleep(0)

    await session.open_conversation(conv_b.id)
    gate.set()
    await slow

    assert session.active_conversation == conv_b.id
    assert all(m.conversation_id == conv_b.id for m in session.messages)
    assert {c.id: c.unread_count for c in session.conversations} == {conv_a.id: 0, conv_b.id: 0}
    assert session.unread_total == 0


@pytest.mark.asyncio
async def test_message_in_active_conversation_is_appended(store, sink, student_principal, peer_id, chats):
    conv_a, _ = chats
    feed = InProcessChangeFeed()
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.start(feed)
    await session.open_conversation(conv_a.id)

    incoming = make_message(conv_a.id, peer_id, content="are you there?")
    store.messages.append(incoming)
    await feed.publish(_insert_event(incoming))

    assert session.messages[-1].id == incoming.id
    assert sink.of_type("chat.message")[-1].content == "are you there?"
    assert session.unread_total == 3


@pytest.mark.asyncio
async def test_message_elsewhere_refetches_list(store, sink, student_principal, peer_id, chats):
    conv_a, conv_b = chats
    feed = InProcessChangeFeed()
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.start(feed)
    await session.open_conversation(conv_a.id)

    incoming = make_message(conv_b.id, peer_id)
    store.messages.append(incoming)
    await feed.publish(_insert_event(incoming))

    assert all(m.conversation_id == conv_a.id for m in session.messages)
    assert sink.of_type("chat.message") == []
    assert {c.id: c.unread_count for c in session.conversations}[conv_b.id] == 3


@pytest.mark.asyncio
async def test_unrelated_message_is_ignored(store, sink, student_principal, chats):
    feed = InProcessChangeFeed()
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.start(feed)
    emitted = len(sink.events)

    strangers = store.add_conversation(make_conversation(), uuid.uuid4(), uuid.uuid4())
    await feed.publish(_insert_event(make_message(strangers.id, uuid.uuid4())))

    assert len(sink.events) == emitted


@pytest.mark.asyncio
async def test_message_in_new_conversation_with_me_refetches(store, sink, student_principal, peer_id):
    feed = InProcessChangeFeed()
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.start(feed)
    assert session.conversations == []

    conv = store.add_conversation(make_conversation(), peer_id, student_principal.user_id)
    incoming = make_message(conv.id, peer_id)
    store.messages.append(incoming)
    await feed.publish(_insert_event(incoming))

    assert [c.id for c in session.conversations] == [conv.id]
    assert session.unread_total == 1


@pytest.mark.asyncio
async def test_fetch_failure_keeps_previous_state(store, sink, student_principal, chats):
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.fetch_conversations()
    before = session.conversations

    session._uow_factory = failing_uow_factory(ConnectionError("down"))
    result = await session.fetch_conversations()

    assert result is before
    assert session.unread_total == 5


@pytest.mark.asyncio
async def test_send_message(store, sink, student_principal, chats):
    conv_a, _ = chats
    session = ChatSession(student_principal, fake_uow_factory(store), sink)

    sent = await session.send_message("hello", conv_a.id)
    blank = await session.send_message("   ", conv_a.id)

    assert sent.content == "hello"
    assert blank is None
    assert store.messages[-1].id == sent.id


@pytest.mark.asyncio
async def test_create_conversation_refetches(store, sink, student_principal, peer_id):
    session = ChatSession(student_principal, fake_uow_factory(store), sink)

    conv = await session.create_conversation([peer_id], title="Lab partners")

    assert [c.id for c in session.conversations] == [conv.id]
    assert session.conversations[0].title == "Lab partners"


@pytest.mark.asyncio
async def test_close_conversation_and_session(store, sink, student_principal, chats):
    conv_a, _ = chats
    feed = InProcessChangeFeed()
    session = ChatSession(student_principal, fake_uow_factory(store), sink)
    await session.start(feed)
    await session.open_conversation(conv_a.id)

    session.close_conversation()
    session.close()

    assert session.active_conversation is None
    assert session.messages == []
    assert feed.listener_count(ChangeTable.CHAT_MESSAGES) == 0
