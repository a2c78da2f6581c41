from __future__ import annotations

from dataclasses import dataclass

from session import SessionSnapshot


@dataclass(frozen=True)
class Metrics:
    wpm: float
    accuracy_pct: float
    perfect: bool
    cpm: float
    correct_wpm: float
    correct_words: int
    characters_typed: int
    character_matches: int
    best_streak: int


def compute_wpm(character_matches: int, correct_words: int, elapsed_s: float) -> float:
    # Each correct word also earns one character for its trailing space.
    if elapsed_s <= 0:
        return 0.0
    return ((character_matches + correct_words) / 5.0) * (60.0 / elapsed_s)


def compute_accuracy(character_matches: int, total_typed: int) -> float:
    if total_typed <= 0:
        return 100.0
    return 100.0 * character_matches / total_typed


def compute_metrics(snapshot: SessionSnapshot, elapsed_s: float) -> Metrics:
    elapsed_s = min(max(elapsed_s, 0.0), float(snapshot.duration_limit))
    minutes = elapsed_s / 60.0
    matches = snapshot.character_matches
    words = snapshot.correct_words

    return Metrics(
        wpm=compute_wpm(matches, words, elapsed_s),
        accuracy_pct=compute_accuracy(matches, snapshot.total_characters_typed),
        perfect=not snapshot.had_any_mistake and words > 0,
        cpm=matches / minutes if minutes > 0 else 0.0,
        correct_wpm=words / minutes if minutes > 0 else 0.0,
        correct_words=words,
        characters_typed=snapshot.total_characters_typed,
        character_matches=matches,
        best_streak=snapshot.best_char_streak,
    )
