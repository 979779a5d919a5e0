"""User store port interface.

Uses typing.Protocol for structural subtyping (not ABCs).
The Supabase adapter implements this protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pace_match.domain.models import Run, User


class UserStore(Protocol):
    """Protocol for reading users and runs and writing feature vectors."""

    async def get_user(self, user_id: int) -> User | None:
        """Fetch a user by id. Returns None when no row matches."""
        ...

    async def get_latest_run(self, user_id: int) -> Run | None:
        """Fetch the user's most recently created run, if any."""
        ...

    async def update_embedding(self, user_id: int, embedding: list[float]) -> None:
        """Overwrite the user's stored feature vector."""
        ...
