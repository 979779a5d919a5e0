"""FastAPI dependency injection helpers.

Extracts shared resources from ``app.state`` so route handlers can
declare them via ``Depends()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request  # noqa: TCH002 — runtime: FastAPI dependency injection

if TYPE_CHECKING:
    from pace_match.matching import MatchingService
    from pace_match.ports.event_bus import ProfileEventPublisher


def get_matching_service(request: Request) -> MatchingService:
    """Return the matching service from app state."""
    return request.app.state.matching_service  # type: ignore[no-any-return]


def get_event_publisher(request: Request) -> ProfileEventPublisher:
    """Return the profile event publisher from app state."""
    return request.app.state.event_publisher  # type: ignore[no-any-return]
