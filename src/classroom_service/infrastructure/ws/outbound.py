"""Per-socket outbound frame queue."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class OutboundQueue:
    """Bounded FIFO of text frames drained by one writer task.

    Producers never wait on the socket: ``put`` only enqueues. When the
    client cannot keep up and the queue is full, new frames are dropped.
    """

    def __init__(self, send: Callable[[str], Awaitable[None]], maxsize: int) -> None:
        self._send = send
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)
        self._task: asyncio.Task[None] | None = None
        self.dropped = 0

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def put(self, text: str) -> bool:
        try:
            self._queue.put_nowait(text)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning("WS send queue full, dropped frame (%d so far)", self.dropped)
            return False
        return True

    def start(self, name: str | None = None) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._drain(), name=name)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _drain(self) -> None:
        try:
            while True:
                text = await self._queue.get()
                await self._send(text)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.debug("WS writer stopped", exc_info=True)
