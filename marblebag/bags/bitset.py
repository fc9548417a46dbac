from __future__ import annotations

from typing import List

from marblebag.bags.base import WORD_BITS, WORD_MASK, MarbleBag
from marblebag.engines.rng import RandomSource

# Clear bits per byte value.
_FREE_BITS = tuple(8 - bin(value).count("1") for value in range(256))


class BitsetMarbleBag(MarbleBag):
    """Bag tracking drawn marbles in a bit-packed bytearray.

    A draw first rolls a candidate over the whole range and keeps it when it
    is still in the bag. On a collision it rolls ``k`` in
    ``[1, remaining]`` and walks forward from the candidate, wrapping, to
    the k-th undrawn marble. Every undrawn marble ends up with probability
    ``1/size + (removed/size) * (1/remaining) == 1/remaining``.

    The walk skips whole bytes by their free-bit count, so a draw costs
    O(size / 8) byte reads at worst.
    """

    def __init__(
        self,
        size: int,
        source: RandomSource | int | None = None,
        *,
        auto_reset: bool = True,
    ) -> None:
        super().__init__(size, source, auto_reset=auto_reset)
        self._bits = bytearray((size + 7) // 8)

    def _is_marked(self, value: int) -> bool:
        return bool(self._bits[value >> 3] >> (value & 7) & 1)

    def _select(self) -> int:
        size = self._size
        bits = self._bits
        candidate = self._source.randint(0, size - 1)
        if not bits[candidate >> 3] >> (candidate & 7) & 1:
            return candidate
        steps = self._source.randint(1, self.remaining_count())
        index = candidate
        while True:
            index += 1
            if index == size:
                index = 0
            if not index & 7 and index + 8 <= size:
                free = _FREE_BITS[bits[index >> 3]]
                if free < steps:
                    steps -= free
                    index += 7
                    continue
            if not bits[index >> 3] >> (index & 7) & 1:
                steps -= 1
                if not steps:
                    return index

    def _mark(self, value: int) -> None:
        self._bits[value >> 3] |= 1 << (value & 7)

    def _clear_marks(self) -> None:
        self._bits[:] = bytes(len(self._bits))

    def _export_words(self) -> List[int]:
        mask = int.from_bytes(self._bits, "little")
        return [(mask >> (index * WORD_BITS)) & WORD_MASK for index in range(self.word_count)]

    def _load_words(self, words: List[int]) -> None:
        mask = 0
        for index, word in enumerate(words):
            mask |= word << (index * WORD_BITS)
        self._bits = bytearray(mask.to_bytes(len(self._bits), "little"))
