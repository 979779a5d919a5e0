"""Table, column, and procedure names of the hosted store schema.

Kept in one place so the adapter and its tests agree on the wire names.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# user
# ---------------------------------------------------------------------------

USER_TABLE = "user"
USER_ID = "id"
USER_BIO = "bio"
USER_DISPLAY_NAME = "display_name"
USER_EMBEDDING = "embedding"

USER_PROFILE_COLUMNS = (USER_ID, USER_BIO, USER_DISPLAY_NAME)

# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

RUN_TABLE = "run"
RUN_ID = "id"
RUN_OWNER = "user"
RUN_CREATED_AT = "created_at"

RUN_ENRICHMENT_COLUMNS = (
    RUN_ID,
    RUN_OWNER,
    "location",
    "target_meters",
    "target_seconds_per_km",
    "datetime",
    RUN_CREATED_AT,
)

# ---------------------------------------------------------------------------
# get_run_matches_by_embedding
# ---------------------------------------------------------------------------

MATCH_PARAM_USER = "p_current_user_id"
MATCH_PARAM_RUN = "p_current_idea_id"

# Procedure row field -> CandidateMatch field
MATCH_ROW_FIELDS = {
    "user_id": "user_id",
    "idea_id": "run_id",
    "display_name": "display_name",
    "bio": "bio",
    "target_pace": "target_pace",
    "target_distance": "target_distance",
    "location": "location",
    "vector_similarity": "similarity",
}
