"""Embedding endpoints.

POST /v1/embeddings/preview         — embed arbitrary text, no store access
POST /v1/users/{user_id}/embedding  — recompute and persist a user's vector
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pace_match.api.dependencies import get_matching_service
from pace_match.domain.embedding import VECTOR_SIZE, generate_embedding
from pace_match.matching import MatchingService  # noqa: TCH001 — runtime: Depends()

router = APIRouter(tags=["embeddings"])

MatchingDep = Annotated[MatchingService, Depends(get_matching_service)]


class PreviewRequest(BaseModel):
    text: str | None = None


class PreviewResponse(BaseModel):
    dimension: int = VECTOR_SIZE
    embedding: list[float]


class RefreshResponse(BaseModel):
    user_id: int
    dimension: int


@router.post("/embeddings/preview")
async def preview_embedding(body: PreviewRequest) -> PreviewResponse:
    """Return the vector the given text would be stored as."""
    return PreviewResponse(embedding=generate_embedding(body.text))


@router.post("/users/{user_id}/embedding")
async def refresh_user_embedding(user_id: int, matching: MatchingDep) -> RefreshResponse:
    """Recompute the user's vector from bio + latest run and overwrite it."""
    embedding = await matching.update_user_embedding(user_id)
    return RefreshResponse(user_id=user_id, dimension=len(embedding))
