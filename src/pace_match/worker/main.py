"""Entry point for the embedding refresh worker (``pace-match-worker``)."""

from __future__ import annotations

import asyncio
import signal

import structlog
from redis.asyncio import Redis

from pace_match.adapters.supabase.client import SupabaseRestClient
from pace_match.adapters.supabase.store import SupabaseMatchStore
from pace_match.logs import configure_logging
from pace_match.matching import MatchingService
from pace_match.settings import Settings
from pace_match.worker.embedding_refresh import EmbeddingRefreshConsumer

log = structlog.get_logger(__name__)


async def run_worker(settings: Settings) -> None:
    """Wire the store and the stream together and consume until signalled."""
    store = SupabaseMatchStore(
        SupabaseRestClient.create(settings.supabase),
        match_function=settings.supabase.match_function,
    )
    redis = Redis(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
        password=settings.redis.password,
        decode_responses=False,
    )
    consumer = EmbeddingRefreshConsumer(
        redis_client=redis,
        matching_service=MatchingService(user_store=store, ranker=store),
        settings=settings.redis,
    )

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, consumer.stop)

    try:
        await consumer.run()
    finally:
        await redis.aclose()
        await store.close()


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level, json_output=not settings.debug)
    log.info("worker_starting", app=settings.app_name, stream=settings.redis.refresh_stream)
    asyncio.run(run_worker(settings))


if __name__ == "__main__":
    main()
