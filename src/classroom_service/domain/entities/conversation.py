from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Conversation:
    id: UUID
    title: str | None
    is_direct: bool
    class_id: UUID | None
    created_at: datetime
    updated_at: datetime
