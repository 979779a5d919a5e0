"""Profile change event ingestion.

POST /v1/events — queue a ProfileChangeEvent for the embedding refresh
worker. Called by the app after sign-up, profile edits, and run
create/update so stored vectors follow their inputs.
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse

from pace_match.api.dependencies import get_event_publisher
from pace_match.domain.models import ProfileChangeEvent  # noqa: TCH001 — runtime: request body
from pace_match.ports.event_bus import ProfileEventPublisher  # noqa: TCH001 — runtime: Depends()

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["events"])

PublisherDep = Annotated[ProfileEventPublisher, Depends(get_event_publisher)]


@router.post("/events", status_code=202)
async def ingest_event(event: ProfileChangeEvent, publisher: PublisherDep) -> ORJSONResponse:
    """Append the event to the refresh stream and return its entry id."""
    entry_id = await publisher.publish(event)
    logger.info(
        "profile_event_accepted",
        event_type=str(event.event_type),
        user_id=event.user_id,
        entry_id=entry_id,
    )
    content: dict[str, Any] = {"entry_id": entry_id, "status": "queued"}
    return ORJSONResponse(status_code=202, content=content)
