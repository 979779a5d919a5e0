"""Domain models for the matching core.

All models are pure Python + Pydantic v2. Zero framework imports.

Field names follow the hosted store's column names so rows can be
validated directly (``target_meters``, ``target_seconds_per_km``...).
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ProfileEventType(enum.StrEnum):
    """Events that change the text a user's feature vector is derived from."""

    USER_CREATED = "user.created"
    USER_PROFILE_UPDATED = "user.profile_updated"
    RUN_CREATED = "run.created"
    RUN_UPDATED = "run.updated"


# ---------------------------------------------------------------------------
# Store records
# ---------------------------------------------------------------------------


class User(BaseModel):
    """A runner's account record."""

    id: int
    bio: str | None = None
    display_name: str | None = None


class Run(BaseModel):
    """A posted running-session proposal."""

    model_config = {"populate_by_name": True}

    id: int | None = None
    user: int | None = None
    target_meters: float | None = None
    target_seconds_per_km: float | None = None
    location: str | None = None
    scheduled_at: datetime | None = Field(default=None, alias="datetime")
    created_at: datetime | None = None

    @property
    def target_km(self) -> float | None:
        """Distance in kilometers; a zero distance counts as unknown."""
        if not self.target_meters:
            return None
        return self.target_meters / 1000


class CandidateMatch(BaseModel):
    """A ranked result of the similarity procedure. Read-only projection."""

    model_config = {"frozen": True}

    user_id: int
    run_id: int
    display_name: str | None = None
    bio: str | None = None
    target_pace: float | None = None
    target_distance: float | None = None
    location: str | None = None
    # NULL when the candidate has no stored embedding yet
    similarity: float | None = None


# ---------------------------------------------------------------------------
# Stream events
# ---------------------------------------------------------------------------


class ProfileChangeEvent(BaseModel):
    """Notification that a user's embedding inputs changed."""

    event_type: ProfileEventType
    user_id: int = Field(gt=0)
    run_id: int | None = None
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_stream_fields(self) -> dict[str, str]:
        """Flatten into the string map a Redis stream entry carries."""
        fields = {
            "event_type": str(self.event_type),
            "user_id": str(self.user_id),
            "occurred_at": self.occurred_at.isoformat(),
        }
        if self.run_id is not None:
            fields["run_id"] = str(self.run_id)
        return fields
