"""Dependent-probability marble bags for gameplay randomization."""

from marblebag.bags import EMPTY, BitsetMarbleBag, MarbleBag, WordMarbleBag
from marblebag.config import BagConfig, build_bag, load_bag_config, load_bag_presets
from marblebag.engines import RNG, RandomSource
from marblebag.usage import UsageSnapshot, bytes_to_words, words_to_bytes

__all__ = [
    "EMPTY",
    "MarbleBag",
    "BitsetMarbleBag",
    "WordMarbleBag",
    "BagConfig",
    "build_bag",
    "load_bag_config",
    "load_bag_presets",
    "RNG",
    "RandomSource",
    "UsageSnapshot",
    "bytes_to_words",
    "words_to_bytes",
]
