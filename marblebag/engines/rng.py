from __future__ import annotations

import random
import time
from typing import Optional, Protocol


class RandomSource(Protocol):
    def randint(self, low: int, high: int) -> int:
        ...


def time_seed() -> int:
    """32-bit seed taken from the wall clock."""
    return time.time_ns() & 0xFFFFFFFF


class RNG:
    """Thin wrapper around random.Random for deterministic runs."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = time_seed() if seed is None else seed
        self._random = random.Random(self.seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


def as_random_source(source: RandomSource | int | None) -> RandomSource:
    if source is None or isinstance(source, int):
        return RNG(source)
    if not callable(getattr(source, "randint", None)):
        raise TypeError(f"Random source must provide randint(low, high), got {type(source).__name__}")
    return source
