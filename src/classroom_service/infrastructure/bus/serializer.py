"""Wire format of the change channel: ``{"event": "<table>.<type>", "data": row}``."""
from __future__ import annotations

import json
from datetime import date, datetime
from enum import Enum
from typing import Any
from uuid import UUID


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, Enum):
            return o.value
        return super().default(o)


def serialize_event(event_type: str, payload: dict[str, Any]) -> str:
    envelope = {"event": event_type, "data": payload}
    return json.dumps(envelope, cls=_Encoder, separators=(",", ":"))


def deserialize_event(raw: str | bytes) -> tuple[str, dict[str, Any]]:
    envelope = json.loads(raw)
    event_type = envelope.get("event")
    data = envelope.get("data")
    if not isinstance(event_type, str) or "." not in event_type:
        raise ValueError(f"Malformed change event name: {event_type!r}")
    if not isinstance(data, dict):
        raise ValueError(f"Change event {event_type} has no row payload")
    return event_type, data
