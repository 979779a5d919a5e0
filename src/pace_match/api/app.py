"""FastAPI application factory.

Creates and configures the pace-match API with lifespan management
for the hosted store client and the Redis event publisher.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from pace_match.adapters.redis.publisher import RedisProfileEventPublisher
from pace_match.adapters.supabase.client import SupabaseRestClient
from pace_match.adapters.supabase.store import SupabaseMatchStore
from pace_match.api.middleware import register_middleware
from pace_match.api.routes.embeddings import router as embeddings_router
from pace_match.api.routes.events import router as events_router
from pace_match.api.routes.health import API_VERSION
from pace_match.api.routes.health import router as health_router
from pace_match.api.routes.matches import router as matches_router
from pace_match.logs import configure_logging
from pace_match.matching import MatchingService
from pace_match.settings import Settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the store + publisher once and release them on shutdown."""
    settings = Settings()
    configure_logging(settings.log_level, json_output=not settings.debug)

    # -- Startup: create clients and attach to app state -------------------
    match_store = SupabaseMatchStore(
        SupabaseRestClient.create(settings.supabase),
        match_function=settings.supabase.match_function,
    )
    event_publisher = RedisProfileEventPublisher.create(settings.redis)

    app.state.match_store = match_store
    app.state.event_publisher = event_publisher
    app.state.matching_service = MatchingService(user_store=match_store, ranker=match_store)

    logger.info(
        "app_started",
        supabase_url=settings.supabase.url,
        redis_host=settings.redis.host,
    )

    yield

    # -- Shutdown: release connections -------------------------------------
    await event_publisher.close()
    await match_store.close()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Build and return the configured FastAPI application."""
    app = FastAPI(
        title="pace-match API",
        description="Runner profile embeddings and run matching",
        version=API_VERSION,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    register_middleware(app)

    app.include_router(health_router, prefix="/v1")
    app.include_router(embeddings_router, prefix="/v1")
    app.include_router(matches_router, prefix="/v1")
    app.include_router(events_router, prefix="/v1")

    return app
