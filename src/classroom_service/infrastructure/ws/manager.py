"""In-process WebSocket connection registry."""
from __future__ import annotations

import logging

from fastapi import WebSocket

from classroom_service.realtime.connection import RealtimeConnection

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks live sockets per principal together with their realtime state.

    Each socket owns one ``RealtimeConnection``; disconnecting closes its
    change-feed subscriptions.
    """

    def __init__(self) -> None:
        self._connections: dict[str, dict[WebSocket, RealtimeConnection]] = {}

    async def connect(self, ws: WebSocket, principal_key: str, conn: RealtimeConnection) -> None:
        await ws.accept()
        self._connections.setdefault(principal_key, {})[ws] = conn
        logger.debug("WS connected: %s (principals=%d)", principal_key, len(self._connections))

    def disconnect(self, ws: WebSocket, principal_key: str) -> None:
        conns = self._connections.get(principal_key)
        if not conns:
            return
        conn = conns.pop(ws, None)
        if conn is not None:
            conn.close()
        if not conns:
            del self._connections[principal_key]
        logger.debug("WS disconnected: %s", principal_key)

    def connection_count(self, principal_key: str | None = None) -> int:
        if principal_key is not None:
            return len(self._connections.get(principal_key, {}))
        return sum(len(c) for c in self._connections.values())

    def close_all(self) -> None:
        for conns in self._connections.values():
            for conn in conns.values():
                conn.close()
        self._connections.clear()
