from __future__ import annotations

from typing import Any
from uuid import UUID

from classroom_service.application.dto.principal import Principal
from classroom_service.domain.value_objects.enums import AppRole

_KNOWN_ROLES = {r.value for r in AppRole}


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from decoded token claims.

    Roles are read from ``roles`` or, for identity providers that nest them,
    from ``app_metadata.roles``. Unknown role names are dropped.
    """
    raw_roles = payload.get("roles")
    if raw_roles is None:
        raw_roles = (payload.get("app_metadata") or {}).get("roles", [])
    if isinstance(raw_roles, str):
        raw_roles = [raw_roles]
    return Principal(
        user_id=UUID(str(payload["sub"])),
        roles=[r for r in raw_roles if r in _KNOWN_ROLES],
    )
