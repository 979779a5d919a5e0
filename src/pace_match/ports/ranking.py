"""Run ranking port interface.

Nearest-neighbour search over stored feature vectors happens inside the
store. This port only names the call so tests can fake it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pace_match.domain.models import CandidateMatch


class RunRanker(Protocol):
    """Protocol for the external similarity-ranking procedure."""

    async def rank_by_embedding(self, user_id: int, run_id: int) -> list[CandidateMatch]:
        """Return candidates for the user/run pair in the procedure's order."""
        ...
