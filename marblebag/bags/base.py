"""Shared contract for marble bags.

A bag holds the integers ``0..size-1`` and hands each one out at most once
per cycle. Once every marble has been drawn the bag is exhausted: with
``auto_reset`` enabled the next draw silently refills it, otherwise
:data:`EMPTY` is returned until :meth:`MarbleBag.reset` is called.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from marblebag.engines.rng import RandomSource, as_random_source

logger = logging.getLogger(__name__)

EMPTY = -1
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


def word_count_for(size: int) -> int:
    return (size + WORD_BITS - 1) // WORD_BITS


class MarbleBag(ABC):
    """Fixed-capacity bag of integer marbles drawn without replacement."""

    def __init__(
        self,
        size: int,
        source: RandomSource | int | None = None,
        *,
        auto_reset: bool = True,
    ) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError(f"size must be an int, got {type(size).__name__}")
        if size < 1:
            raise ValueError("size must be at least 1")
        self._size = size
        self.auto_reset = bool(auto_reset)
        self._source = as_random_source(source)
        self._removed_count = 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={self._size}, remaining={self.remaining_count()}, "
            f"auto_reset={self.auto_reset})"
        )

    def __len__(self) -> int:
        return self.remaining_count()

    def __bool__(self) -> bool:
        return self.has_marbles()

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied; export_usage() to persist its state")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied; export_usage() to persist its state")

    def __reduce_ex__(self, protocol):
        raise TypeError(f"{type(self).__name__} cannot be pickled; export_usage() to persist its state")

    @property
    def size(self) -> int:
        return self._size

    @property
    def word_count(self) -> int:
        return word_count_for(self._size)

    @property
    def random_source(self) -> RandomSource:
        return self._source

    def set_random_source(self, source: RandomSource | int | None) -> None:
        """Replace the generator used for future draws."""
        self._source = as_random_source(source)

    def remaining_count(self) -> int:
        return self._size - self._removed_count

    def has_marbles(self) -> bool:
        return self.remaining_count() > 0

    def reset(self) -> None:
        self._clear_marks()
        self._removed_count = 0

    def draw(self) -> int:
        """Return the next marble, or EMPTY when none remain and auto_reset is off."""
        if not self.has_marbles():
            if not self.auto_reset:
                logger.debug("marblebag.bag.exhausted", extra={"size": self._size})
                return EMPTY
            logger.debug("marblebag.bag.auto_reset", extra={"size": self._size})
            self.reset()
        value = self._select()
        self._mark(value)
        self._removed_count += 1
        return value

    def draw_many(self, count: int) -> List[int]:
        if count < 0:
            raise ValueError("count must not be negative")
        return [self.draw() for _ in range(count)]

    def drawn(self) -> List[int]:
        return [value for value in range(self._size) if self._is_marked(value)]

    def remaining(self) -> List[int]:
        return [value for value in range(self._size) if not self._is_marked(value)]

    def export_usage(self) -> List[int]:
        """Drawn marbles as uint64 words; marble i is bit i % 64 of word i // 64."""
        return self._export_words()

    def import_usage(self, words: Iterable[int]) -> None:
        """Restore drawn marbles from export_usage() output.

        Only the overlapping prefix is copied; missing words are treated as
        zero, extra words and bits past ``size`` are ignored. The removed
        count is recomputed from the imported bits.
        """
        if isinstance(words, (bytes, bytearray, memoryview, str)):
            raise ValueError("usage data must be a sequence of uint64 words; decode byte blobs with bytes_to_words()")
        count = self.word_count
        restored: List[int] = [0] * count
        for index, word in enumerate(words):
            if isinstance(word, bool) or not isinstance(word, int):
                raise ValueError(f"usage word {index} is not an int: {word!r}")
            if not 0 <= word <= WORD_MASK:
                raise ValueError(f"usage word {index} out of uint64 range: {word}")
            if index < count:
                restored[index] = word
        tail_bits = self._size - (count - 1) * WORD_BITS
        restored[-1] &= (1 << tail_bits) - 1
        self._load_words(restored)
        self._removed_count = sum(word.bit_count() for word in restored)
        logger.debug(
            "marblebag.bag.usage_imported",
            extra={"size": self._size, "remaining": self.remaining_count()},
        )

    def is_drawn(self, value: int) -> bool:
        """True when value has been drawn since the last reset."""
        if not 0 <= value < self._size:
            raise ValueError(f"marble {value} outside bag of size {self._size}")
        return self._is_marked(value)

    @abstractmethod
    def _is_marked(self, value: int) -> bool:
        ...

    @abstractmethod
    def _select(self) -> int:
        """Pick an undrawn marble. Only called while marbles remain."""

    @abstractmethod
    def _mark(self, value: int) -> None:
        ...

    @abstractmethod
    def _clear_marks(self) -> None:
        ...

    @abstractmethod
    def _export_words(self) -> List[int]:
        ...

    @abstractmethod
    def _load_words(self, words: List[int]) -> None:
        ...


def restore_bag(bag: MarbleBag, words: Optional[Iterable[int]]) -> MarbleBag:
    if words is not None:
        bag.import_usage(words)
    return bag


__all__ = ["EMPTY", "MarbleBag", "WORD_BITS", "WORD_MASK", "restore_bag", "word_count_for"]
