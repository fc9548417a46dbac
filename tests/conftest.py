from __future__ import annotations

from typing import Iterable, List

import pytest

from marblebag.bags import BitsetMarbleBag, WordMarbleBag


class ScriptedSource:
    """Random source replaying fixed rolls, checking each stays in bounds."""

    def __init__(self, rolls: Iterable[int]) -> None:
        self.rolls: List[int] = list(rolls)
        self.calls: List[tuple[int, int]] = []

    def randint(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        value = self.rolls.pop(0)
        assert low <= value <= high, f"scripted roll {value} outside [{low}, {high}]"
        return value


@pytest.fixture(params=[BitsetMarbleBag, WordMarbleBag], ids=["bitset", "words"])
def bag_cls(request):
    return request.param


@pytest.fixture()
def scripted():
    return ScriptedSource
