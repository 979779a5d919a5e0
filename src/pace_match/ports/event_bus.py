"""Profile change event publishing port."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pace_match.domain.models import ProfileChangeEvent


class ProfileEventPublisher(Protocol):
    """Protocol for handing profile change events to the refresh worker."""

    async def publish(self, event: ProfileChangeEvent) -> str:
        """Append an event and return its stream entry id."""
        ...
