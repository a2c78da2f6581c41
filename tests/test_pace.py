"""Tests for pace – the ghost cursor."""

from __future__ import annotations

import pytest

from pace import PaceCursor
from words import WordSource


@pytest.fixture()
def words() -> WordSource:
    return WordSource(["hello", "to", "you"], shuffle=False)


class TestOffset:
    def test_sixty_wpm_after_ten_seconds(self, words):
        pace = PaceCursor(60, start_time=100.0, source=words)
        assert pace.offset(110.0) == 50

    def test_zero_at_start(self, words):
        pace = PaceCursor(60, start_time=100.0, source=words)
        assert pace.offset(100.0) == 0

    def test_floors_partial_characters(self, words):
        pace = PaceCursor(60, start_time=0.0, source=words)
        assert pace.offset(0.3) == 1

    def test_clock_before_start_clamps_to_zero(self, words):
        pace = PaceCursor(60, start_time=100.0, source=words)
        assert pace.offset(90.0) == 0

    def test_chars_per_second(self, words):
        assert PaceCursor(60, 0.0, words).chars_per_second == 5.0

    @pytest.mark.parametrize("wpm", [0, -10])
    def test_rejects_non_positive_rate(self, words, wpm):
        with pytest.raises(ValueError):
            PaceCursor(wpm, 0.0, words)


class TestPosition:
    # Stream: "hello " (0-5), "to " (6-8), "you " (9-12), "hello " (13-18) ...

    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0.0, (0, 0)),
            (0.8, (0, 4)),
            (1.0, (0, 5)),
            (1.2, (1, 0)),
            (1.6, (1, 2)),
            (1.8, (2, 0)),
            (2.6, (3, 0)),
        ],
    )
    def test_maps_offset_to_word_and_char(self, words, seconds, expected):
        pace = PaceCursor(60, start_time=0.0, source=words)
        assert pace.position(seconds) == expected

    def test_far_into_the_stream(self, words):
        pace = PaceCursor(60, start_time=0.0, source=words)
        # 13 characters per pass over the three words; offset 130 is ten passes in.
        assert pace.position(26.0) == (30, 0)

    def test_querying_earlier_time_after_later(self, words):
        pace = PaceCursor(60, start_time=0.0, source=words)
        pace.position(26.0)
        assert pace.position(1.2) == (1, 0)
