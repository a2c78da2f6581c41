from __future__ import annotations

import math
from bisect import bisect_right

CHARS_PER_WORD = 5


class PaceCursor:
    """Ghost cursor moving through the word stream at ``target_wpm``.

    Each word occupies its own length plus one separator in the stream, so
    ``char_index == len(word)`` means the cursor sits on the space after it.
    """

    def __init__(self, target_wpm: int, start_time: float, source) -> None:
        if target_wpm <= 0:
            raise ValueError(f"target_wpm must be positive, got {target_wpm}")
        self.target_wpm = target_wpm
        self.start_time = start_time
        self._source = source
        # _starts[i] is the stream offset of the first character of word i.
        self._starts: list[int] = [0]

    @property
    def chars_per_second(self) -> float:
        return self.target_wpm * CHARS_PER_WORD / 60.0

    def offset(self, now: float) -> int:
        elapsed = max(now - self.start_time, 0.0)
        return math.floor(self.target_wpm * CHARS_PER_WORD * elapsed / 60.0)

    def position(self, now: float) -> tuple[int, int]:
        offset = self.offset(now)
        while self._starts[-1] <= offset:
            index = len(self._starts) - 1
            self._starts.append(self._starts[-1] + len(self._source.word_at(index)) + 1)
        word_index = bisect_right(self._starts, offset) - 1
        return word_index, offset - self._starts[word_index]
