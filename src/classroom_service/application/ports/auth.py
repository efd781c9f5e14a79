from __future__ import annotations

from typing import Protocol

from classroom_service.application.dto.principal import Principal


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> Principal:
        """Decode a bearer token; raises on bad signature, expiry or audience."""
        ...
