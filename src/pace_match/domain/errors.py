"""Error taxonomy for the matching core.

Pure Python, zero framework imports. Adapters translate their own
failures into these types so callers only ever handle one family.
"""

from __future__ import annotations


class MatchingError(Exception):
    """Base class for every error raised by the matching core."""


class NotFoundError(MatchingError):
    """Raised when a referenced record does not exist in the store."""

    def __init__(self, entity: str, entity_id: int | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class RemoteFailureError(MatchingError):
    """Raised when the external store or a remote procedure call fails.

    ``message`` is the store's own error text, kept verbatim.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.operation = operation
        self.message = message
        self.status_code = status_code
        super().__init__(message)
