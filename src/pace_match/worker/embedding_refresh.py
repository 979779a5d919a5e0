"""Embedding refresh worker.

Reads ProfileChangeEvent entries from the refresh stream and recomputes
the affected user's feature vector, so a bio edit or a new run never
leaves a stale vector in the store.

Ack policy:
  - refreshed            -> ack
  - malformed entry      -> log + ack (replaying cannot fix it)
  - user no longer exists -> log + ack
  - store failure        -> raise, entry stays pending for replay
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from pace_match.domain.errors import NotFoundError
from pace_match.domain.models import ProfileChangeEvent
from pace_match.worker.consumer import BaseConsumer

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from pace_match.matching import MatchingService
    from pace_match.settings import RedisSettings

log = structlog.get_logger(__name__)


class EmbeddingRefreshConsumer(BaseConsumer):
    """Recomputes user embeddings in response to profile change events."""

    def __init__(
        self,
        redis_client: Redis,
        matching_service: MatchingService,
        settings: RedisSettings,
    ) -> None:
        super().__init__(
            redis_client=redis_client,
            group_name=settings.group_refresh,
            consumer_name=settings.consumer_name,
            stream_key=settings.refresh_stream,
            batch_size=settings.batch_size,
            block_timeout_ms=settings.block_timeout_ms,
        )
        self._matching = matching_service

    async def process_message(self, entry_id: str, data: dict[str, str]) -> None:
        try:
            event = ProfileChangeEvent.model_validate(data)
        except ValidationError as exc:
            log.warning(
                "refresh_event_invalid",
                entry_id=entry_id,
                errors=exc.error_count(),
                fields=sorted(data),
            )
            return

        try:
            await self._matching.update_user_embedding(event.user_id)
        except NotFoundError:
            log.warning(
                "refresh_user_missing",
                entry_id=entry_id,
                user_id=event.user_id,
                event_type=str(event.event_type),
            )
            return

        log.debug(
            "refresh_event_processed",
            entry_id=entry_id,
            user_id=event.user_id,
            event_type=str(event.event_type),
        )
