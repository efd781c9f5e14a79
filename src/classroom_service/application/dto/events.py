from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A row-level change delivered by the change feed."""

    table: str
    type: str
    record: dict[str, Any]

    @classmethod
    def from_envelope(cls, event_type: str, data: dict[str, Any]) -> ChangeEvent:
        """Build from a ``"<table>.<type>"`` event name and its row payload."""
        table, _, change_type = event_type.partition(".")
        return cls(table=table, type=change_type or "insert", record=data)

    @property
    def event_type(self) -> str:
        return f"{self.table}.{self.type}"
