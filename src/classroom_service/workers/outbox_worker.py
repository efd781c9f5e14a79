"""Outbox worker: publishes committed change events on the Redis Pub/Sub channel."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import redis.asyncio as aioredis

from classroom_service.application.ports.bus import EventPublisher
from classroom_service.application.uow import UnitOfWork
from classroom_service.config import settings
from classroom_service.infrastructure.bus.redis_pubsub import RedisPubSubPublisher
from classroom_service.infrastructure.db.uow import open_uow

logger = logging.getLogger(__name__)

BASE_DELAY_SECONDS = 5
MAX_DELAY_SECONDS = 300


def _calc_backoff(attempts: int) -> datetime:
    delay = min(BASE_DELAY_SECONDS * (2 ** attempts), MAX_DELAY_SECONDS)
    return datetime.now(timezone.utc) + timedelta(seconds=delay)


async def run_outbox_worker() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    publisher = RedisPubSubPublisher(redis)

    logger.info(
        "Outbox worker started (channel=%s, poll=%.1fs, batch=%d, max_attempts=%d)",
        settings.REDIS_PUBSUB_CHANNEL,
        settings.OUTBOX_POLL_INTERVAL,
        settings.OUTBOX_BATCH_SIZE,
        settings.OUTBOX_MAX_ATTEMPTS,
    )

    try:
        while True:
            try:
                async with open_uow() as uow:
                    await publish_batch(uow, publisher)
            except Exception:
                logger.exception("Outbox worker loop error")
            await asyncio.sleep(settings.OUTBOX_POLL_INTERVAL)
    finally:
        await redis.aclose()


async def publish_batch(uow: UnitOfWork, publisher: EventPublisher) -> int:
    """Publish one batch of pending records; returns how many were sent."""
    batch = await uow.outbox.fetch_pending(settings.OUTBOX_BATCH_SIZE)
    if not batch:
        return 0

    sent_ids: list[int] = []
    for record in batch:
        if record.attempts >= settings.OUTBOX_MAX_ATTEMPTS:
            # Stays in "processing" and is never fetched again
            logger.warning("Outbox record %d exceeded max attempts, giving up", record.id)
            continue
        try:
            await publisher.publish(
                settings.REDIS_PUBSUB_CHANNEL, record.event_type, record.payload,
            )
            sent_ids.append(record.id)
        except Exception:
            logger.exception("Failed to publish outbox record %d (%s)", record.id, record.event_type)
            await uow.outbox.mark_failed(record.id, _calc_backoff(record.attempts))

    if sent_ids:
        await uow.outbox.mark_sent(sent_ids)

    await uow.commit()
    if sent_ids:
        logger.info("Published %d outbox records", len(sent_ids))
    return len(sent_ids)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(run_outbox_worker())


if __name__ == "__main__":
    main()
