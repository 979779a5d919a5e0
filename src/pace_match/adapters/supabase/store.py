"""Supabase match store adapter.

Implements both the ``UserStore`` and ``RunRanker`` protocols on top of
``SupabaseRestClient``:

- **user** table for bios and the feature vector column
- **run** table for the latest-run enrichment lookup
- **get_run_matches_by_embedding** procedure for ranking
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from pace_match.adapters.supabase import tables
from pace_match.domain.models import CandidateMatch, Run, User

if TYPE_CHECKING:
    from pace_match.adapters.supabase.client import SupabaseRestClient

log = structlog.get_logger(__name__)


def row_to_candidate(row: dict[str, Any]) -> CandidateMatch:
    """Rename a procedure row's fields onto ``CandidateMatch``."""
    return CandidateMatch.model_validate(
        {field: row.get(column) for column, field in tables.MATCH_ROW_FIELDS.items()}
    )


class SupabaseMatchStore:
    """UserStore + RunRanker implementation backed by the hosted store."""

    def __init__(self, client: SupabaseRestClient, match_function: str) -> None:
        self._client = client
        self._match_function = match_function

    async def close(self) -> None:
        await self._client.close()

    async def ping(self) -> None:
        await self._client.ping()

    # -- UserStore ----------------------------------------------------------

    async def get_user(self, user_id: int) -> User | None:
        rows = await self._client.select(
            tables.USER_TABLE,
            tables.USER_PROFILE_COLUMNS,
            filters={tables.USER_ID: user_id},
            limit=1,
        )
        if not rows:
            return None
        return User.model_validate(rows[0])

    async def get_latest_run(self, user_id: int) -> Run | None:
        rows = await self._client.select(
            tables.RUN_TABLE,
            tables.RUN_ENRICHMENT_COLUMNS,
            filters={tables.RUN_OWNER: user_id},
            order=tables.RUN_CREATED_AT,
            descending=True,
            limit=1,
        )
        if not rows:
            return None
        return Run.model_validate(rows[0])

    async def update_embedding(self, user_id: int, embedding: list[float]) -> None:
        await self._client.update(
            tables.USER_TABLE,
            {tables.USER_EMBEDDING: embedding},
            filters={tables.USER_ID: user_id},
        )
        log.debug("embedding_written", user_id=user_id, dimension=len(embedding))

    # -- RunRanker ----------------------------------------------------------

    async def rank_by_embedding(self, user_id: int, run_id: int) -> list[CandidateMatch]:
        rows = await self._client.rpc(
            self._match_function,
            {tables.MATCH_PARAM_USER: user_id, tables.MATCH_PARAM_RUN: run_id},
        )
        return [row_to_candidate(row) for row in rows or []]
