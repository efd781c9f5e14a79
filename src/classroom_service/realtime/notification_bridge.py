"""Pushes a notification when new content lands in one of the user's classes."""
from __future__ import annotations

import logging
from uuid import UUID

from classroom_service.application.dto.events import ChangeEvent
from classroom_service.application.ports.feed import ChangeFeed, EventSink, Subscription
from classroom_service.application.uow import UoWFactory
from classroom_service.realtime.unread_tracker import CONTENT_TABLES
from classroom_service.services import notification_service

logger = logging.getLogger(__name__)


class NotificationBridge:
    """Change-feed listener for the content tables of one connected user.

    The set of enrolled classes is loaded once in ``start``. A class joined
    afterwards stays invisible until ``refresh_enrolled_classes`` is called.
    """

    def __init__(self, user_id: UUID, uow_factory: UoWFactory, sink: EventSink) -> None:
        self._user_id = user_id
        self._uow_factory = uow_factory
        self._sink = sink
        self._subscriptions: list[Subscription] = []
        self._enrolled: set[UUID] = set()

    @property
    def enrolled_class_ids(self) -> frozenset[UUID]:
        return frozenset(self._enrolled)

    async def start(self, feed: ChangeFeed) -> None:
        self._enrolled = await self._fetch_enrolled_classes()
        for table in CONTENT_TABLES:
            self._subscriptions.append(feed.subscribe(table, self._on_insert))
        logger.debug(
            "Notification bridge for %s watching %d classes",
            self._user_id, len(self._enrolled),
        )

    def close(self) -> None:
        for sub in self._subscriptions:
            sub.close()
        self._subscriptions.clear()

    async def refresh_enrolled_classes(self) -> frozenset[UUID]:
        self._enrolled = await self._fetch_enrolled_classes()
        return self.enrolled_class_ids

    async def _fetch_enrolled_classes(self) -> set[UUID]:
        try:
            async with self._uow_factory() as uow:
                return set(await uow.memberships.list_class_ids(self._user_id))
        except Exception:
            logger.exception("Error fetching enrolled classes for %s", self._user_id)
            return self._enrolled

    async def _on_insert(self, event: ChangeEvent) -> None:
        class_id = notification_service.event_class_id(event)
        if class_id is None or class_id not in self._enrolled:
            return

        # Always a fresh lookup: the class may have been renamed
        async with self._uow_factory() as uow:
            class_name = await notification_service.resolve_class_name(class_id, uow)

        notification = notification_service.build_notification(event, class_name)
        if notification is not None:
            await self._sink("notification", notification)
