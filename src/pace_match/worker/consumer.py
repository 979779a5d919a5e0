"""Base consumer class for Redis Stream consumer workers.

Runs the consumer-group lifecycle: create the group, replay this
consumer's pending entries, then block on new ones. Subclasses override
``process_message``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from redis.exceptions import ResponseError

if TYPE_CHECKING:
    from redis.asyncio import Redis

log = structlog.get_logger(__name__)


def _as_str(value: bytes | str) -> str:
    return value.decode() if isinstance(value, bytes) else str(value)


def decode_entry(entry_id_raw: bytes | str, data: dict[Any, Any]) -> tuple[str, dict[str, str]]:
    """Decode a raw stream entry id and field map into strings."""
    return _as_str(entry_id_raw), {_as_str(k): _as_str(v) for k, v in data.items()}


class BaseConsumer:
    """Base class for Redis Stream consumer workers.

    An entry is XACKed once ``process_message`` returns. If it raises,
    the entry stays in the Pending Entries List (PEL) and is replayed
    the next time the consumer starts.
    """

    def __init__(
        self,
        redis_client: Redis,
        group_name: str,
        consumer_name: str,
        stream_key: str,
        batch_size: int = 10,
        block_timeout_ms: int = 5000,
    ) -> None:
        self._redis = redis_client
        self._group_name = group_name
        self._consumer_name = consumer_name
        self._stream_key = stream_key
        self._batch_size = batch_size
        self._block_timeout_ms = block_timeout_ms
        self._stopped = False

    async def ensure_group(self) -> None:
        """Create the consumer group (and the stream) if missing."""
        try:
            await self._redis.xgroup_create(
                name=self._stream_key,
                groupname=self._group_name,
                id="0",
                mkstream=True,
            )
            log.info(
                "consumer_group_created",
                group=self._group_name,
                stream=self._stream_key,
            )
        except ResponseError as exc:
            if "BUSYGROUP" not in str(exc):
                raise
            log.debug(
                "consumer_group_exists",
                group=self._group_name,
                stream=self._stream_key,
            )

    async def _read(self, start_id: str, block: int | None) -> list[Any]:
        return await self._redis.xreadgroup(  # type: ignore[no-any-return]
            groupname=self._group_name,
            consumername=self._consumer_name,
            streams={self._stream_key: start_id},
            count=self._batch_size,
            block=block,
        )

    async def _handle(self, messages: list[Any]) -> None:
        """Process and ack a batch of entries."""
        for _stream_name, entries in messages:
            for entry_id_raw, data in entries:
                entry_id, fields = decode_entry(entry_id_raw, data)
                try:
                    await self.process_message(entry_id, fields)
                    await self._redis.xack(self._stream_key, self._group_name, entry_id)
                except Exception:
                    log.exception(
                        "message_processing_failed",
                        entry_id=entry_id,
                        group=self._group_name,
                        consumer=self._consumer_name,
                    )

    async def drain_pending(self) -> None:
        """Replay entries delivered to this consumer but never acknowledged.

        One pass over the PEL: entries that fail again stay pending for
        the next start instead of spinning here.
        """
        last_id = "0"
        while not self._stopped:
            pending = await self._read(last_id, block=None)
            entries = [entry for _, batch in pending or [] for entry in batch]
            if not entries:
                break
            await self._handle(pending)
            last_id = _as_str(entries[-1][0])
        log.info("pending_drain_completed", group=self._group_name)

    async def run(self) -> None:
        """Main consumer loop. Runs until ``stop()`` is called."""
        await self.ensure_group()
        log.info(
            "consumer_started",
            group=self._group_name,
            consumer=self._consumer_name,
            stream=self._stream_key,
        )

        await self.drain_pending()

        while not self._stopped:
            messages = await self._read(">", block=self._block_timeout_ms)
            if messages:
                await self._handle(messages)

        log.info(
            "consumer_stopped",
            group=self._group_name,
            consumer=self._consumer_name,
        )

    async def process_message(self, entry_id: str, data: dict[str, str]) -> None:
        """Process a single stream message. Override in subclasses."""
        raise NotImplementedError

    def stop(self) -> None:
        """Signal the consumer loop to stop gracefully."""
        self._stopped = True
