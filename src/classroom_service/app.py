from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classroom_service.api.middleware.correlation_id import CorrelationIdMiddleware
from classroom_service.api.middleware.metrics import RequestTimingMiddleware
from classroom_service.api.v1.routers import (
    classes,
    conversations,
    health,
    messages,
    unread,
    ws,
)
from classroom_service.application.exceptions import AppError
from classroom_service.config import settings
from classroom_service.infrastructure.bus.change_feed import InProcessChangeFeed
from classroom_service.infrastructure.bus.redis_pubsub import RedisPubSubSubscriber
from classroom_service.infrastructure.db.uow import open_uow

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.redis = aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )
    logger.info("Redis connection pool created")

    subscriber = RedisPubSubSubscriber(
        app.state.redis,
        settings.REDIS_PUBSUB_CHANNEL,
        app.state.change_feed.dispatch,
    )
    await subscriber.start()
    app.state.pubsub_subscriber = subscriber

    yield

    ws.get_manager().close_all()
    await subscriber.stop()
    await app.state.redis.aclose()
    logger.info("Redis connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Classroom Realtime Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    # Created here rather than in lifespan so tests without startup still get a feed
    app.state.change_feed = InProcessChangeFeed()
    app.state.uow_factory = open_uow

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(unread.router)
    app.include_router(conversations.router)
    app.include_router(messages.router)
    app.include_router(classes.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(_req: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
