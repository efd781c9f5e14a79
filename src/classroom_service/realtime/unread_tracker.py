"""Per-connection unread counter for classwork and announcements."""
from __future__ import annotations

import logging
from uuid import UUID

from classroom_service.application.dto.events import ChangeEvent
from classroom_service.application.dto.unread import UnreadCounts
from classroom_service.application.ports.feed import ChangeFeed, EventSink, Subscription
from classroom_service.application.uow import UoWFactory
from classroom_service.domain.value_objects.enums import ChangeTable, ContentKind
from classroom_service.services import unread_service

logger = logging.getLogger(__name__)

CONTENT_TABLES = (ChangeTable.CLASSWORK_ITEMS, ChangeTable.ANNOUNCEMENTS)


class UnreadTracker:
    """Holds the latest unread counts of one user and recomputes them on change.

    Every insert on a content table triggers a full recomputation. Each
    refresh takes a version token; a result that finishes after a newer
    refresh was issued is dropped, so late responses never overwrite newer
    state. Read failures are logged and the previous counts are kept.
    """

    def __init__(
        self,
        user_id: UUID,
        uow_factory: UoWFactory,
        sink: EventSink | None = None,
    ) -> None:
        self._user_id = user_id
        self._uow_factory = uow_factory
        self._sink = sink
        self._subscriptions: list[Subscription] = []
        self._version = 0
        self.counts = UnreadCounts()
        self.loading = True

    async def start(self, feed: ChangeFeed) -> UnreadCounts:
        for table in CONTENT_TABLES:
            self._subscriptions.append(feed.subscribe(table, self._on_insert))
        return await self.refresh()

    def close(self) -> None:
        for sub in self._subscriptions:
            sub.close()
        self._subscriptions.clear()

    async def refresh(self) -> UnreadCounts:
        self._version += 1
        version = self._version
        try:
            async with self._uow_factory() as uow:
                counts = await unread_service.compute_unread_counts(self._user_id, uow)
        except Exception:
            logger.exception("Error fetching unread counts for %s", self._user_id)
            return self.counts
        finally:
            self.loading = False

        if version != self._version:
            logger.debug("Dropping stale unread counts v%d (latest v%d)", version, self._version)
            return self.counts

        self.counts = counts
        if self._sink is not None:
            await self._sink("unread.updated", counts)
        return counts

    async def mark_as_read(self, content_id: UUID, kind: ContentKind) -> UnreadCounts:
        async with self._uow_factory() as uow:
            await unread_service.mark_as_read(self._user_id, content_id, kind, uow)
        return await self.refresh()

    async def _on_insert(self, _event: ChangeEvent) -> None:
        await self.refresh()
