"""In-process fan-out of change events to per-table subscription handles."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from classroom_service.application.dto.events import ChangeEvent
from classroom_service.application.ports.feed import ChangeCallback

logger = logging.getLogger(__name__)


class FeedSubscription:
    """Owned handle for one listener; usable as a context manager."""

    def __init__(self, feed: InProcessChangeFeed, table: str, callback: ChangeCallback) -> None:
        self._feed = feed
        self.table = table
        self.callback = callback
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._feed._remove(self)

    def __enter__(self) -> FeedSubscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class InProcessChangeFeed:
    """Implements application.ports.feed.ChangeFeed.

    One instance per process, owned by the app lifespan. Only insert events
    are delivered to listeners. Listeners of one event run concurrently, so a
    slow listener delays only its own connection; events are still delivered
    one after another.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[FeedSubscription]] = {}

    def subscribe(self, table: str, callback: ChangeCallback) -> FeedSubscription:
        sub = FeedSubscription(self, table, callback)
        self._listeners.setdefault(table, []).append(sub)
        logger.debug("Change feed subscription opened on %s", table)
        return sub

    def listener_count(self, table: str) -> int:
        return len(self._listeners.get(table, []))

    async def dispatch(self, event_type: str, data: dict[str, Any]) -> None:
        """Entry point for the Redis Pub/Sub subscriber."""
        await self.publish(ChangeEvent.from_envelope(event_type, data))

    async def publish(self, event: ChangeEvent) -> None:
        if event.type != "insert":
            return
        # Copy: callbacks may close their own subscription
        subs = list(self._listeners.get(event.table, []))
        if subs:
            await asyncio.gather(*(self._deliver(sub, event) for sub in subs))

    async def _deliver(self, sub: FeedSubscription, event: ChangeEvent) -> None:
        if sub.closed:
            return
        try:
            await sub.callback(event)
        except Exception:
            logger.exception("Change feed listener failed for %s", event.event_type)

    def _remove(self, sub: FeedSubscription) -> None:
        subs = self._listeners.get(sub.table)
        if subs and sub in subs:
            subs.remove(sub)
            if not subs:
                del self._listeners[sub.table]
        logger.debug("Change feed subscription closed on %s", sub.table)
