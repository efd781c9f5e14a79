"""Entrypoint: python -m classroom_service"""
from __future__ import annotations

import uvicorn

from classroom_service.config import settings


def main() -> None:
    uvicorn.run(
        "classroom_service.app:create_app",
        factory=True,
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
