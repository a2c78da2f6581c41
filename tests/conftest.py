"""Shared fixtures for the tigertype test suite."""

from __future__ import annotations

import pytest

from words import WordSource


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def source() -> WordSource:
    """Unshuffled source cycling through a short, known word list."""
    return WordSource(["the", "cat", "sat", "on", "a", "mat"], shuffle=False)
