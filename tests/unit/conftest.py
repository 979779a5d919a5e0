"""Unit test conftest with in-memory store stubs for service and API testing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pace_match.matching import MatchingService
from tests.fixtures.fakes import InMemoryEventPublisher, InMemoryUserStore, StubRanker

if TYPE_CHECKING:
    from fastapi.testclient import TestClient


@pytest.fixture()
def user_store() -> InMemoryUserStore:
    """Return a fresh in-memory user store."""
    return InMemoryUserStore()


@pytest.fixture()
def ranker() -> StubRanker:
    """Return a ranker with no canned rows."""
    return StubRanker()


@pytest.fixture()
def event_publisher() -> InMemoryEventPublisher:
    """Return a fresh in-memory event publisher."""
    return InMemoryEventPublisher()


@pytest.fixture()
def matching_service(user_store: InMemoryUserStore, ranker: StubRanker) -> MatchingService:
    """MatchingService wired to the in-memory collaborators."""
    return MatchingService(user_store=user_store, ranker=ranker)


@pytest.fixture()
def test_client(
    user_store: InMemoryUserStore,
    matching_service: MatchingService,
    event_publisher: InMemoryEventPublisher,
) -> TestClient:
    """FastAPI TestClient with in-memory stores (no Supabase/Redis needed)."""
    from fastapi import FastAPI
    from fastapi.responses import ORJSONResponse
    from fastapi.testclient import TestClient as _TestClient

    from pace_match.api.middleware import register_middleware
    from pace_match.api.routes.embeddings import router as embeddings_router
    from pace_match.api.routes.events import router as events_router
    from pace_match.api.routes.health import router as health_router
    from pace_match.api.routes.matches import router as matches_router

    app = FastAPI(default_response_class=ORJSONResponse)
    register_middleware(app)
    app.include_router(health_router, prefix="/v1")
    app.include_router(embeddings_router, prefix="/v1")
    app.include_router(matches_router, prefix="/v1")
    app.include_router(events_router, prefix="/v1")

    app.state.match_store = user_store
    app.state.matching_service = matching_service
    app.state.event_publisher = event_publisher

    return _TestClient(app, raise_server_exceptions=False)
