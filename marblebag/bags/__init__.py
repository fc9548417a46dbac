"""Marble bag variants."""

from marblebag.bags.base import EMPTY, MarbleBag, restore_bag, word_count_for
from marblebag.bags.bitset import BitsetMarbleBag
from marblebag.bags.words import WordMarbleBag

__all__ = [
    "EMPTY",
    "MarbleBag",
    "BitsetMarbleBag",
    "WordMarbleBag",
    "restore_bag",
    "word_count_for",
]
