from __future__ import annotations

import sys
from array import array
from typing import List

from pydantic import BaseModel, Field, field_validator

from marblebag.bags.base import WORD_BITS, WORD_MASK, MarbleBag

_WORD_BYTES = WORD_BITS // 8


def words_to_bytes(words: List[int]) -> bytes:
    """Pack usage words as little-endian uint64s."""
    packed = array("Q", words)
    if packed.itemsize != _WORD_BYTES:  # pragma: no cover - exotic platforms
        raise RuntimeError("array('Q') is not 64 bits wide on this platform")
    if sys.byteorder == "big":  # pragma: no cover - big-endian hosts
        packed.byteswap()
    return packed.tobytes()


def bytes_to_words(blob: bytes) -> List[int]:
    if len(blob) % _WORD_BYTES:
        raise ValueError(f"usage blob length {len(blob)} is not a multiple of {_WORD_BYTES}")
    packed = array("Q")
    packed.frombytes(blob)
    if sys.byteorder == "big":  # pragma: no cover - big-endian hosts
        packed.byteswap()
    return packed.tolist()


class UsageSnapshot(BaseModel):
    """Persistable record of which marbles a bag has handed out."""

    size: int = Field(ge=1, description="Bag capacity the words were exported from")
    words: List[int] = Field(default_factory=list, description="Drawn-marble bitmask, 64 marbles per word")

    @field_validator("words")
    @classmethod
    def _check_words(cls, value: List[int]) -> List[int]:
        for index, word in enumerate(value):
            if not 0 <= word <= WORD_MASK:
                raise ValueError(f"usage word {index} out of uint64 range: {word}")
        return value

    @property
    def drawn_count(self) -> int:
        mask = 0
        for index, word in enumerate(self.words):
            mask |= word << (index * WORD_BITS)
        return (mask & ((1 << self.size) - 1)).bit_count()

    @property
    def remaining_count(self) -> int:
        return self.size - self.drawn_count

    @classmethod
    def from_bag(cls, bag: MarbleBag) -> "UsageSnapshot":
        return cls(size=bag.size, words=bag.export_usage())

    @classmethod
    def from_bytes(cls, size: int, blob: bytes) -> "UsageSnapshot":
        return cls(size=size, words=bytes_to_words(blob))

    def to_bytes(self) -> bytes:
        return words_to_bytes(self.words)

    def apply(self, bag: MarbleBag) -> None:
        if bag.size != self.size:
            raise ValueError(f"snapshot for size {self.size} cannot restore bag of size {bag.size}")
        bag.import_usage(self.words)


__all__ = ["UsageSnapshot", "bytes_to_words", "words_to_bytes"]
