from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True, slots=True)
class ClassUnread:
    classwork: int = 0
    announcements: int = 0

    @property
    def total(self) -> int:
        return self.classwork + self.announcements


@dataclass(frozen=True, slots=True)
class UnreadCounts:
    """Unread totals per content kind, plus a breakdown per class."""

    classwork: int = 0
    announcements: int = 0
    by_class: dict[UUID, ClassUnread] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.classwork + self.announcements
