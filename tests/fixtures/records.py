"""Record factory functions for tests.

Builders for users, runs, and raw procedure rows with sensible defaults.
Every function accepts **overrides so callers can replace any field.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pace_match.domain.models import Run, User


def make_user(**overrides) -> User:
    """Create a User with a short bio."""
    defaults: dict = {
        "id": 42,
        "bio": "5k runner, mornings only",
        "display_name": "Sam",
    }
    defaults.update(overrides)
    return User(**defaults)


def make_run(**overrides) -> Run:
    """Create a Run owned by user 42: 5 km at 5:00 /km in the park."""
    defaults: dict = {
        "id": 7,
        "user": 42,
        "target_meters": 5000,
        "target_seconds_per_km": 300,
        "location": "Golden Gate Park",
        "created_at": datetime(2025, 5, 1, 7, 30, tzinfo=UTC),
    }
    defaults.update(overrides)
    return Run(**defaults)


def make_match_row(**overrides) -> dict:
    """Create one raw row as returned by get_run_matches_by_embedding."""
    defaults: dict = {
        "user_id": 11,
        "idea_id": 101,
        "display_name": "Alex",
        "bio": "Trail runner",
        "target_pace": 330,
        "target_distance": 8000,
        "location": "Presidio",
        "vector_similarity": 0.91,
    }
    defaults.update(overrides)
    return defaults
