from __future__ import annotations

from array import array
from typing import List

from marblebag.bags.base import WORD_BITS, WORD_MASK, MarbleBag
from marblebag.engines.rng import RandomSource


class WordMarbleBag(MarbleBag):
    """Bag backed by a fixed array of uint64 words, laid out like its usage data.

    Draws roll a candidate over the full range. A saturated word is skipped
    for the next one; otherwise the word is scanned from the candidate's bit,
    wrapping inside the word, up to the first clear bit.

    Faster than the index walk on nearly-full words but not uniform once
    marbles have been drawn: a clear bit directly after a run of drawn bits
    collects the rolls of the whole run.
    """

    def __init__(
        self,
        size: int,
        source: RandomSource | int | None = None,
        *,
        auto_reset: bool = True,
    ) -> None:
        super().__init__(size, source, auto_reset=auto_reset)
        self._words = array("Q", [0] * self.word_count)
        tail = size - (self.word_count - 1) * WORD_BITS
        self._tail_bits = tail
        self._tail_mask = WORD_MASK if tail == WORD_BITS else (1 << tail) - 1

    def _width(self, word_index: int) -> int:
        return self._tail_bits if word_index == len(self._words) - 1 else WORD_BITS

    def _full(self, word_index: int) -> int:
        return self._tail_mask if word_index == len(self._words) - 1 else WORD_MASK

    def _is_marked(self, value: int) -> bool:
        word_index, bit = divmod(value, WORD_BITS)
        return bool(self._words[word_index] >> bit & 1)

    def _select(self) -> int:
        word_index, offset = divmod(self._source.randint(0, self._size - 1), WORD_BITS)
        while self._words[word_index] == self._full(word_index):
            word_index = (word_index + 1) % len(self._words)
        word = self._words[word_index]
        width = self._width(word_index)
        offset %= width
        for step in range(width):
            bit = (offset + step) % width
            if not word >> bit & 1:
                return word_index * WORD_BITS + bit
        raise RuntimeError(f"word {word_index} reported free bits but none were found")

    def _mark(self, value: int) -> None:
        word_index, bit = divmod(value, WORD_BITS)
        self._words[word_index] |= 1 << bit

    def _clear_marks(self) -> None:
        for index in range(len(self._words)):
            self._words[index] = 0

    def _export_words(self) -> List[int]:
        return self._words.tolist()

    def _load_words(self, words: List[int]) -> None:
        self._words = array("Q", words)
