"""Random engines feeding the bags."""

from .rng import RNG, RandomSource, as_random_source, time_seed

__all__ = ["RNG", "RandomSource", "as_random_source", "time_seed"]
