from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class SchoolClass:
    id: UUID
    name: str
    section: str | None
    subject: str | None
    class_code: str
    created_by: UUID | None
    created_at: datetime
