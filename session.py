from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple

from matcher import Verdict, is_word_correct, match_character
from pace import PaceCursor


logger = logging.getLogger(__name__)

WORD_BOUNDARY = " "


class Status(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class Cursor(NamedTuple):
    word_index: int
    char_index: int


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for rendering and metrics."""

    status: Status
    cursor: Cursor
    # typed_history[i] is what was typed for word i; the last entry is the current word.
    typed_history: tuple[str, ...]
    duration_limit: int
    start_time: float | None
    end_time: float | None
    character_matches: int
    total_characters_typed: int
    correct_words: int
    had_any_mistake: bool
    current_char_streak: int
    best_char_streak: int


class Session:
    """One timed typing attempt.

    The timer starts on the first character typed and the session finishes
    once ``duration_limit`` seconds have elapsed, which ``tick`` checks on
    every frame. Input arriving after that is ignored. Reset is done by
    building a new ``Session``.
    """

    def __init__(
        self,
        source,
        duration_limit: int,
        target_wpm: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if duration_limit <= 0:
            raise ValueError(f"duration_limit must be positive, got {duration_limit}")
        if target_wpm < 0:
            raise ValueError(f"target_wpm must not be negative, got {target_wpm}")
        self.source = source
        self.duration_limit = duration_limit
        self.target_wpm = target_wpm
        self._clock = clock

        self.status = Status.IDLE
        self.start_time: float | None = None
        self.end_time: float | None = None
        self.pace: PaceCursor | None = None

        self._typed: list[str] = [""]
        self.character_matches = 0
        self.total_characters_typed = 0
        self.correct_words = 0
        self.had_any_mistake = False
        self.current_char_streak = 0
        self.best_char_streak = 0

    @property
    def cursor(self) -> Cursor:
        return Cursor(len(self._typed) - 1, len(self._typed[-1]))

    @property
    def current_word(self) -> str:
        return self.source.word_at(len(self._typed) - 1)

    @property
    def is_finished(self) -> bool:
        return self.status is Status.FINISHED

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    def _start(self, now: float) -> None:
        self.status = Status.RUNNING
        self.start_time = now
        if self.target_wpm > 0:
            self.pace = PaceCursor(self.target_wpm, now, self.source)
        logger.debug("Session started (limit=%ss, target_wpm=%s)", self.duration_limit, self.target_wpm)

    def submit_character(self, ch: str, now: float | None = None) -> Verdict | None:
        """Feed one typed character; a space commits the current word.

        Returns the matcher's verdict, or ``None`` when nothing was compared
        (session finished, or a word boundary was pressed).
        """
        now = self._now(now)
        self.tick(now)
        if self.status is Status.FINISHED:
            return None

        if ch == WORD_BOUNDARY:
            self._commit_word()
            return None

        if self.status is Status.IDLE:
            self._start(now)

        typed = self._typed[-1]
        verdict = match_character(self.current_word, typed, ch)
        self.total_characters_typed += 1
        if verdict is Verdict.MATCH:
            self.character_matches += 1
            self.current_char_streak += 1
            self.best_char_streak = max(self.best_char_streak, self.current_char_streak)
        else:
            self.had_any_mistake = True
            self.current_char_streak = 0
        self._typed[-1] = typed + ch
        return verdict

    def _commit_word(self) -> None:
        typed = self._typed[-1]
        if not typed:
            return
        if is_word_correct(self.current_word, typed):
            self.correct_words += 1
        self._typed.append("")

    def submit_backspace(self, now: float | None = None) -> None:
        self.tick(self._now(now))
        if self.status is Status.FINISHED:
            return
        self._typed[-1] = self._typed[-1][:-1]

    def clear_word(self, now: float | None = None) -> None:
        self.tick(self._now(now))
        if self.status is Status.FINISHED:
            return
        self._typed[-1] = ""

    def tick(self, now: float | None = None) -> None:
        if self.status is not Status.RUNNING:
            return
        now = self._now(now)
        if now - self.start_time >= self.duration_limit:
            self.status = Status.FINISHED
            self.end_time = self.start_time + self.duration_limit
            self.pace = None
            logger.info(
                "Session finished: %d/%d characters matched, %d correct words",
                self.character_matches,
                self.total_characters_typed,
                self.correct_words,
            )

    def elapsed(self, now: float | None = None) -> float:
        if self.status is Status.IDLE:
            return 0.0
        if self.status is Status.FINISHED:
            return float(self.duration_limit)
        return min(self._now(now) - self.start_time, float(self.duration_limit))

    def remaining(self, now: float | None = None) -> float:
        return max(self.duration_limit - self.elapsed(now), 0.0)

    def pace_position(self, now: float | None = None) -> Cursor | None:
        if self.pace is None:
            return None
        return Cursor(*self.pace.position(self._now(now)))

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self.status,
            cursor=self.cursor,
            typed_history=tuple(self._typed),
            duration_limit=self.duration_limit,
            start_time=self.start_time,
            end_time=self.end_time,
            character_matches=self.character_matches,
            total_characters_typed=self.total_characters_typed,
            correct_words=self.correct_words,
            had_any_mistake=self.had_any_mistake,
            current_char_streak=self.current_char_streak,
            best_char_streak=self.best_char_streak,
        )


def new_session(settings, source, clock: Callable[[], float] = time.monotonic) -> Session:
    return Session(source, settings.time, target_wpm=settings.target_wpm, clock=clock)
