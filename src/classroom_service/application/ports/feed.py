from __future__ import annotations

from typing import Any, Callable, Coroutine, Protocol

from classroom_service.application.dto.events import ChangeEvent

ChangeCallback = Callable[[ChangeEvent], Coroutine[Any, Any, None]]


class Subscription(Protocol):
    """Handle for one change-feed listener. Closing it stops delivery."""

    @property
    def closed(self) -> bool: ...

    def close(self) -> None: ...


class ChangeFeed(Protocol):
    def subscribe(self, table: str, callback: ChangeCallback) -> Subscription: ...


# Pushes a named event with its payload object to the connected client.
EventSink = Callable[[str, Any], Coroutine[Any, Any, None]]
