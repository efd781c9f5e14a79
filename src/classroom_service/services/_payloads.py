"""Convert domain rows into JSON-ready change-feed payloads."""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any
from uuid import UUID


def row_payload(entity: Any) -> dict[str, Any]:
    return {key: _jsonable(value) for key, value in asdict(entity).items()}


def _jsonable(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value
