"""Health check endpoint.

GET /v1/health — reports status of the hosted store and Redis.
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Request

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])

API_VERSION = "0.1.0"


@router.get("/health")
async def health_check(request: Request) -> dict[str, Any]:
    """Service health check.

    Returns "healthy" when both the store and Redis answer, "degraded"
    when only one does, and "unhealthy" when neither responds.
    """
    store_ok = False
    redis_ok = False

    try:
        await request.app.state.match_store.ping()
        store_ok = True
    except Exception:
        logger.warning("health_check_store_failed")

    try:
        await request.app.state.event_publisher.ping()
        redis_ok = True
    except Exception:
        logger.warning("health_check_redis_failed")

    if store_ok and redis_ok:
        status = "healthy"
    elif store_ok or redis_ok:
        status = "degraded"
    else:
        status = "unhealthy"

    return {
        "status": status,
        "store": store_ok,
        "redis": redis_ok,
        "version": API_VERSION,
    }
