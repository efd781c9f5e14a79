from __future__ import annotations

from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.read_marker import ReadMarker


class ReadMarkerReader(Protocol):
    async def list_for_user(self, user_id: UUID) -> list[ReadMarker]: ...


class ReadMarkerWriter(Protocol):
    async def upsert(self, marker: ReadMarker) -> None:
        """Insert the marker; an existing (user, content, type) row is left as is."""
        ...
