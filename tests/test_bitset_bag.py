from __future__ import annotations

from collections import Counter

from marblebag.bags import BitsetMarbleBag
from marblebag.bags.base import WORD_MASK
from marblebag.engines import RNG


def test_free_candidate_is_taken_directly(scripted):
    source = scripted([4])
    bag = BitsetMarbleBag(5, source, auto_reset=False)
    bag.import_usage([0b00101])
    assert bag.draw() == 4
    assert source.calls == [(0, 4)]


def test_collision_walks_to_kth_free_marble(scripted):
    source = scripted([2, 2])
    bag = BitsetMarbleBag(5, source, auto_reset=False)
    bag.import_usage([0b00101])
    assert bag.draw() == 4
    assert source.calls == [(0, 4), (1, 3)]


def test_walk_wraps_around(scripted):
    bag = BitsetMarbleBag(5, scripted([3, 2]), auto_reset=False)
    bag.import_usage([0b11010])
    assert bag.draw() == 2


def test_mid_cycle_draw_is_uniform():
    bag = BitsetMarbleBag(5, RNG(2024), auto_reset=False)
    counts: Counter[int] = Counter()
    for _ in range(3000):
        bag.import_usage([0b00011])
        counts[bag.draw()] += 1
    assert set(counts) == {2, 3, 4}
    for value in (2, 3, 4):
        assert 880 <= counts[value] <= 1120, counts


def test_first_draw_covers_range():
    bag = BitsetMarbleBag(4, RNG(7))
    counts: Counter[int] = Counter()
    for _ in range(2000):
        bag.reset()
        counts[bag.draw()] += 1
    assert set(counts) == {0, 1, 2, 3}
    assert min(counts.values()) > 400


class _CountingBytes(bytearray):
    reads = 0

    def __getitem__(self, index):
        self.reads += 1
        return super().__getitem__(index)


def test_walk_skips_whole_bytes_on_large_bag(scripted):
    size = 200_000
    bag = BitsetMarbleBag(size, scripted([0, 1]), auto_reset=False)
    words = [WORD_MASK] * (size // 64)
    words[-1] ^= 1 << 63
    bag.import_usage(words)
    assert bag.remaining() == [size - 1]

    bag._bits = _CountingBytes(bag._bits)
    assert bag.draw() == size - 1
    assert bag._bits.reads <= size // 8 + 64
    assert bag.remaining_count() == 0
