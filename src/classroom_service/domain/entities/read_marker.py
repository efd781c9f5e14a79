from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ReadMarker:
    user_id: UUID
    content_id: UUID
    content_type: str
