"""Unit tests for the Redis profile event publisher."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

from pace_match.adapters.redis.publisher import RedisProfileEventPublisher
from pace_match.domain.models import ProfileChangeEvent, ProfileEventType


class TestRedisProfileEventPublisher:
    async def test_publish_xadds_stream_fields(self) -> None:
        redis = AsyncMock()
        redis.xadd.return_value = b"1714550400000-0"
        publisher = RedisProfileEventPublisher(redis, stream_key="events:profile")
        event = ProfileChangeEvent(
            event_type=ProfileEventType.USER_PROFILE_UPDATED,
            user_id=42,
            occurred_at=datetime(2025, 5, 1, tzinfo=UTC),
        )

        entry_id = await publisher.publish(event)

        assert entry_id == "1714550400000-0"
        redis.xadd.assert_awaited_once_with(
            "events:profile",
            {
                "event_type": "user.profile_updated",
                "user_id": "42",
                "occurred_at": "2025-05-01T00:00:00+00:00",
            },
        )

    async def test_close_releases_connection(self) -> None:
        redis = AsyncMock()
        await RedisProfileEventPublisher(redis, stream_key="s").close()
        redis.aclose.assert_awaited_once()
