"""Embedding & ranking client.

Orchestrates the two store-facing operations of the matching core:

- ``update_user_embedding``: fetch bio + latest run, embed, overwrite.
- ``get_run_matches``: delegate ranking to the store's procedure.

The store handles are injected; nothing here reaches for a global client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from pace_match.domain.embedding import build_profile_text, generate_embedding
from pace_match.domain.errors import NotFoundError, RemoteFailureError

if TYPE_CHECKING:
    from pace_match.domain.models import CandidateMatch, Run
    from pace_match.ports.ranking import RunRanker
    from pace_match.ports.user_store import UserStore

log = structlog.get_logger(__name__)


class MatchingService:
    """Derives, persists, and ranks by user feature vectors."""

    def __init__(self, user_store: UserStore, ranker: RunRanker) -> None:
        self._user_store = user_store
        self._ranker = ranker

    async def update_user_embedding(self, user_id: int) -> list[float]:
        """Recompute and overwrite the stored feature vector for ``user_id``.

        Raises:
            NotFoundError: the user does not exist. Nothing is written.
            RemoteFailureError: the user lookup or the final write failed.
        """
        user = await self._user_store.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        latest_run = await self._latest_run_or_none(user_id)
        text = build_profile_text(user.bio, latest_run)
        embedding = generate_embedding(text)

        await self._user_store.update_embedding(user_id, embedding)

        log.info(
            "embedding_updated",
            user_id=user_id,
            has_run=latest_run is not None,
            text_length=len(text),
        )
        return embedding

    async def _latest_run_or_none(self, user_id: int) -> Run | None:
        # Enrichment only: a failed lookup must not abort the refresh
        try:
            return await self._user_store.get_latest_run(user_id)
        except RemoteFailureError as exc:
            log.warning(
                "latest_run_lookup_failed",
                user_id=user_id,
                error=exc.message,
                status_code=exc.status_code,
            )
            return None

    async def get_run_matches(
        self,
        current_user_id: int,
        current_run_id: int,
    ) -> list[CandidateMatch]:
        """Return ranked candidates for a user/run pair, in the store's order."""
        matches = await self._ranker.rank_by_embedding(current_user_id, current_run_id)
        log.debug(
            "run_matches_fetched",
            user_id=current_user_id,
            run_id=current_run_id,
            count=len(matches),
        )
        return matches
