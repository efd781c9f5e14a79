from __future__ import annotations

import logging

from classroom_service.application.dto.principal import Principal
from classroom_service.application.ports.feed import ChangeFeed, EventSink
from classroom_service.application.uow import UoWFactory
from classroom_service.realtime.chat_session import ChatSession
from classroom_service.realtime.notification_bridge import NotificationBridge
from classroom_service.realtime.unread_tracker import UnreadTracker

logger = logging.getLogger(__name__)


class RealtimeConnection:
    """Realtime state of one socket: unread counts, notifications and chat.

    Unread tracking only exists for students.
    """

    def __init__(self, principal: Principal, uow_factory: UoWFactory, sink: EventSink) -> None:
        self.principal = principal
        self.unread: UnreadTracker | None = None
        if principal.is_student:
            self.unread = UnreadTracker(principal.user_id, uow_factory, sink)
        self.notifications = NotificationBridge(principal.user_id, uow_factory, sink)
        self.chat = ChatSession(principal, uow_factory, sink)
        self._closed = False

    async def start(self, feed: ChangeFeed) -> None:
        if self.unread is not None:
            await self.unread.start(feed)
        await self.notifications.start(feed)
        await self.chat.start(feed)
        logger.debug("Realtime connection started for %s", self.principal.user_id)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.unread is not None:
            self.unread.close()
        self.notifications.close()
        self.chat.close()
