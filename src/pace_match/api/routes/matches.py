"""Run match endpoint.

GET /v1/users/{user_id}/runs/{run_id}/matches — ranked candidates from the
store's similarity procedure, returned in the procedure's order.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from pace_match.api.dependencies import get_matching_service
from pace_match.domain.models import CandidateMatch  # noqa: TCH001 — runtime: response model
from pace_match.matching import MatchingService  # noqa: TCH001 — runtime: Depends()

router = APIRouter(prefix="/users", tags=["matches"])

MatchingDep = Annotated[MatchingService, Depends(get_matching_service)]


@router.get("/{user_id}/runs/{run_id}/matches")
async def get_run_matches(
    user_id: int,
    run_id: int,
    matching: MatchingDep,
) -> list[CandidateMatch]:
    """Return ranked candidates for the user's run, in the store's order."""
    return await matching.get_run_matches(user_id, run_id)
