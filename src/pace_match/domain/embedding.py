"""Deterministic character-code embedding.

Pure Python + stdlib. ZERO framework imports.

The vector is not semantic. Each character's code point is accumulated
into slot ``position % VECTOR_SIZE`` and the result is max-normalized:

  - acc[k] = sum(ord(text[p]) for p where p % 384 == k)
  - v[k]   = acc[k] / max(max(acc), 1)

Stored vectors and the store's similarity procedure both depend on this
exact shape, so the arithmetic must not change.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pace_match.domain.models import Run

# Length of the store's vector column
VECTOR_SIZE = 384

UNKNOWN_FIELD = "?"
EMPTY_BIO = "(empty)"


def generate_embedding(text: str | None) -> list[float]:
    """Return the max-normalized 384-slot character-code vector for ``text``.

    Empty or whitespace-only text yields the all-zero vector. Every other
    input yields values in [0.0, 1.0].
    """
    if not text or not text.strip():
        return [0.0] * VECTOR_SIZE

    accumulator = [0.0] * VECTOR_SIZE
    for position, char in enumerate(text):
        accumulator[position % VECTOR_SIZE] += ord(char)

    max_val = max(max(accumulator), 1.0)
    return [value / max_val for value in accumulator]


def _format_number(value: float) -> str:
    """Render a number the way the stored profile texts were rendered.

    Integral values drop the ``.0``. Plain decimal notation is used for
    magnitudes in [1e-6, 1e21); outside that range the exponent form has
    no zero padding (``1.5e-7``).
    """
    number = float(value)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    text = repr(number)
    if "e" in text and 1e-6 <= abs(number) < 1e21:
        return format(Decimal(text), "f")
    return text.replace("e-0", "e-").replace("e+0", "e+")


def build_profile_text(bio: str | None, latest_run: Run | None = None) -> str:
    """Combine a user's bio and most recent run into the text that gets embedded.

    Missing fields are replaced with placeholders rather than dropped so
    the text keeps the same layout for every user.
    """
    text = f"Bio: {bio or EMPTY_BIO}. "

    if latest_run is not None:
        km = latest_run.target_km
        pace = latest_run.target_seconds_per_km
        location = latest_run.location if latest_run.location is not None else UNKNOWN_FIELD
        dist = _format_number(km) if km is not None else UNKNOWN_FIELD
        pace_text = _format_number(pace) if pace is not None else UNKNOWN_FIELD
        text += f"Idea => loc: {location}, dist: {dist}km, pace: {pace_text}"

    return text
