from __future__ import annotations

import random

import pytest

from marblebag.engines import rng as rng_module
from marblebag.engines.rng import RNG, as_random_source, time_seed


def test_rng_is_deterministic_for_seed():
    first = RNG(42)
    second = RNG(42)
    assert [first.randint(0, 9) for _ in range(20)] == [second.randint(0, 9) for _ in range(20)]


def test_rng_without_seed_uses_clock(monkeypatch):
    monkeypatch.setattr(rng_module.time, "time_ns", lambda: (1 << 40) + 1234)
    assert time_seed() == 1234
    assert RNG().seed == 1234


def test_randint_is_inclusive():
    source = RNG(3)
    seen = {source.randint(1, 3) for _ in range(200)}
    assert seen == {1, 2, 3}


def test_as_random_source_wraps_seeds_and_passes_sources():
    assert isinstance(as_random_source(None), RNG)
    assert as_random_source(5).seed == 5
    engine = random.Random(1)
    assert as_random_source(engine) is engine


def test_as_random_source_rejects_objects_without_randint():
    with pytest.raises(TypeError):
        as_random_source("not a source")
