"""Application settings via Pydantic BaseSettings.

All configuration uses the PM_ environment variable prefix.
The vector size is deliberately absent: it is fixed by the store's
vector column (see ``pace_match.domain.embedding.VECTOR_SIZE``).
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class SupabaseSettings(BaseSettings):
    """Hosted store (PostgREST) connection settings."""

    model_config = {"env_prefix": "PM_SUPABASE_"}

    url: str = "http://localhost:54321"
    key: str = ""
    schema_name: str = "public"
    timeout_seconds: float = 10.0

    # Similarity procedure exposed by the store
    match_function: str = "get_run_matches_by_embedding"


class RedisSettings(BaseSettings):
    """Redis connection settings for the profile event stream."""

    model_config = {"env_prefix": "PM_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str | None = None

    # Stream of ProfileChangeEvent entries
    refresh_stream: str = "events:profile"

    # Consumer group name
    group_refresh: str = "embedding-refresh"
    consumer_name: str = "embedding-refresh-1"

    # Consumer group block timeout (ms)
    block_timeout_ms: int = 5000
    batch_size: int = 10


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "PM_"}

    app_name: str = "pace-match"
    debug: bool = False
    log_level: str = "INFO"

    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
