from __future__ import annotations

from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.content import (
    Announcement,
    ClassworkItem,
    ContentRef,
)


class ContentReader(Protocol):
    async def list_classwork_refs(self, class_ids: list[UUID]) -> list[ContentRef]: ...

    async def list_announcement_refs(self, class_ids: list[UUID]) -> list[ContentRef]: ...


class ContentWriter(Protocol):
    async def add_classwork(self, item: ClassworkItem) -> ClassworkItem: ...

    async def add_announcement(self, announcement: Announcement) -> Announcement: ...
