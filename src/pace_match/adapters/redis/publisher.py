"""Redis Streams publisher for profile change events.

Implements the ``ProfileEventPublisher`` protocol with a plain ``XADD``
onto the refresh stream. The refresh worker reads the same stream
through its consumer group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from redis.asyncio import Redis

if TYPE_CHECKING:
    from pace_match.domain.models import ProfileChangeEvent
    from pace_match.settings import RedisSettings

log = structlog.get_logger(__name__)


class RedisProfileEventPublisher:
    """ProfileEventPublisher backed by a Redis stream."""

    def __init__(self, client: Redis, stream_key: str) -> None:
        self._client = client
        self._stream_key = stream_key

    @classmethod
    def create(cls, settings: RedisSettings) -> RedisProfileEventPublisher:
        """Factory: create a publisher from settings."""
        client = Redis(
            host=settings.host,
            port=settings.port,
            db=settings.db,
            password=settings.password,
            decode_responses=False,
        )
        return cls(client=client, stream_key=settings.refresh_stream)

    async def publish(self, event: ProfileChangeEvent) -> str:
        """Append ``event`` to the stream. Returns the stream entry id."""
        raw_id = await self._client.xadd(self._stream_key, event.to_stream_fields())  # type: ignore[arg-type]
        entry_id = raw_id.decode() if isinstance(raw_id, bytes) else str(raw_id)
        log.debug(
            "profile_event_published",
            entry_id=entry_id,
            event_type=str(event.event_type),
            user_id=event.user_id,
        )
        return entry_id

    async def ping(self) -> None:
        await self._client.ping()

    async def close(self) -> None:
        """Release the Redis connection."""
        await self._client.aclose()
        log.info("redis_connection_closed")
