from __future__ import annotations

from enum import Enum


class Verdict(Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    EXTRA = "extra"

    @property
    def is_mistake(self) -> bool:
        return self is not Verdict.MATCH


def match_character(target: str, typed_so_far: str, ch: str) -> Verdict:
    """Judge ``ch`` against the character expected after ``typed_so_far``.

    Characters typed beyond the end of ``target`` are ``EXTRA``.
    """
    position = len(typed_so_far)
    if position >= len(target):
        return Verdict.EXTRA
    if ch == target[position]:
        return Verdict.MATCH
    return Verdict.MISMATCH


def is_word_correct(target: str, typed: str) -> bool:
    return typed == target
