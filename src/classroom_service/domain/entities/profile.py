from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Profile:
    user_id: UUID
    email: str
    full_name: str | None
    avatar_url: str | None
