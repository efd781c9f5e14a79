from __future__ import annotations

from typing import Protocol
from uuid import UUID

from classroom_service.domain.entities.profile import Profile


class ProfileReader(Protocol):
    async def list_by_user_ids(self, user_ids: list[UUID]) -> list[Profile]: ...
