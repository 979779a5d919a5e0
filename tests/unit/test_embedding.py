"""Unit tests for the character-code embedding and the profile text builder."""

from __future__ import annotations

import pytest

from pace_match.domain.embedding import VECTOR_SIZE, build_profile_text, generate_embedding
from tests.fixtures.records import make_run

ZEROS = [0.0] * VECTOR_SIZE


# ---------------------------------------------------------------------------
# generate_embedding
# ---------------------------------------------------------------------------


class TestGenerateEmbedding:
    @pytest.mark.parametrize(
        "text",
        [
            "a",
            "5k runner, mornings only",
            "Läufer aus München, 10 km",
            "🏃‍♀️ easy miles",
            "x" * 5000,
            "\t leading and trailing whitespace \n",
        ],
    )
    def test_always_384_values_in_unit_interval(self, text: str) -> None:
        vector = generate_embedding(text)
        assert len(vector) == VECTOR_SIZE
        assert all(0.0 <= value <= 1.0 for value in vector)

    @pytest.mark.parametrize("text", ["", "   ", "\n\t  \r", None])
    def test_blank_text_is_zero_vector(self, text: str | None) -> None:
        assert generate_embedding(text) == ZEROS

    def test_deterministic(self) -> None:
        text = "Tempo on Tuesdays, long run Sunday"
        assert generate_embedding(text) == generate_embedding(text)

    def test_short_text_slots_are_code_points_over_max(self) -> None:
        vector = generate_embedding("abc")
        assert vector[0] == 97 / 99
        assert vector[1] == 98 / 99
        assert vector[2] == 1.0
        assert vector[3:] == [0.0] * (VECTOR_SIZE - 3)

    def test_largest_slot_is_one(self) -> None:
        vector = generate_embedding("hello runner")
        assert max(vector) == 1.0
        assert vector[0] == ord("h") / ord("u")

    def test_wrap_around_accumulates_into_same_slot(self) -> None:
        # 'A' at positions 0 and 384, 'b' everywhere else, 400 chars total
        text = "A" + "b" * 383 + "A" + "b" * 15
        assert len(text) == 400

        vector = generate_embedding(text)

        # slots 1..15 hold two 'b's (196), the max; slot 0 holds two 'A's (130)
        assert vector[0] == 130 / 196
        assert vector[1] == 1.0
        assert vector[15] == 1.0
        assert vector[16] == 98 / 196
        assert vector[383] == 98 / 196

    def test_full_cycle_repetition_keeps_normalized_shape(self) -> None:
        # Repeating a full 384-char cycle doubles every raw slot
        cycle = "".join(chr(ord("a") + i % 26) for i in range(VECTOR_SIZE))
        assert generate_embedding(cycle * 2) == generate_embedding(cycle)

    def test_repeated_contribution_never_decreases_slot(self) -> None:
        base = "r" * VECTOR_SIZE
        # Second cycle only touches slot 0, so it is the only slot that grows
        boosted = base + "r"
        vector = generate_embedding(boosted)
        assert vector[0] == 1.0
        assert vector[1] == 0.5

    def test_non_ascii_uses_code_point(self) -> None:
        vector = generate_embedding("é a")
        assert vector[0] == 1.0
        assert vector[1] == ord(" ") / ord("é")

    def test_astral_character_occupies_one_slot(self) -> None:
        vector = generate_embedding("🏃a")
        assert vector[0] == 1.0
        assert vector[1] == ord("a") / ord("🏃")
        assert vector[2] == 0.0

    def test_max_floor_avoids_division_by_zero(self) -> None:
        # NUL is not whitespace, so this is not the blank short-circuit
        assert generate_embedding("\x00\x00") == ZEROS

    def test_max_floor_of_one_keeps_tiny_codes(self) -> None:
        vector = generate_embedding("\x01")
        assert vector[0] == 1.0


# ---------------------------------------------------------------------------
# build_profile_text
# ---------------------------------------------------------------------------


class TestBuildProfileText:
    def test_bio_only(self) -> None:
        assert build_profile_text("5k runner, mornings only") == "Bio: 5k runner, mornings only. "

    @pytest.mark.parametrize("bio", [None, ""])
    def test_missing_bio_uses_placeholder(self, bio: str | None) -> None:
        assert build_profile_text(bio) == "Bio: (empty). "

    def test_run_enrichment(self) -> None:
        text = build_profile_text("5k runner, mornings only", make_run())
        assert text == (
            "Bio: 5k runner, mornings only. "
            "Idea => loc: Golden Gate Park, dist: 5km, pace: 300"
        )

    def test_fractional_distance(self) -> None:
        text = build_profile_text("x", make_run(target_meters=5500))
        assert "dist: 5.5km" in text

    def test_integral_float_pace_has_no_decimal(self) -> None:
        text = build_profile_text("x", make_run(target_seconds_per_km=300.0))
        assert text.endswith("pace: 300")

    @pytest.mark.parametrize("meters", [None, 0])
    def test_unknown_distance_placeholder(self, meters: int | None) -> None:
        text = build_profile_text("x", make_run(target_meters=meters))
        assert "dist: ?km" in text

    def test_all_run_fields_missing(self) -> None:
        run = make_run(location=None, target_meters=None, target_seconds_per_km=None)
        assert build_profile_text(None, run) == (
            "Bio: (empty). Idea => loc: ?, dist: ?km, pace: ?"
        )

    @pytest.mark.parametrize(
        ("pace", "rendered"),
        [
            (5.5, "5.5"),
            (0.0001, "0.0001"),
            (1e-05, "0.00001"),
            (1e-06, "0.000001"),
            (1.5e-07, "1.5e-7"),
        ],
    )
    def test_small_numbers_use_plain_decimals_down_to_one_millionth(
        self,
        pace: float,
        rendered: str,
    ) -> None:
        text = build_profile_text("x", make_run(target_seconds_per_km=pace))
        assert text.endswith(f"pace: {rendered}")
