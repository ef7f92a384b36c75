from memorymaze.rng import (
    hash01, to_int32, xor_seed, pm_next, seed_for_level, random_level_seed, M, LEVEL_SEED_SALT
)
import random

import pytest


def test_hash01_range_and_purity():
    for s in list(range(-500, 500)) + [2**31 - 1, -2**31, 123456789012]:
        v = hash01(s)
        assert 0.0 <= v < 1.0
        assert hash01(s) == v
    assert hash01(0) == 0.0


def test_to_int32_wraps_like_32bit():
    assert to_int32(0) == 0
    assert to_int32(-1) == -1
    assert to_int32(2**31 - 1) == 2**31 - 1
    assert to_int32(2**31) == -2**31
    assert to_int32(2**32 + 5) == 5
    assert to_int32(0xFFFFFFFF) == -1


def test_xor_seed():
    assert xor_seed(5, 3) == 6
    assert xor_seed(5, 3, 6) == 0
    # operands are wrapped before combining
    assert xor_seed(2**32 + 7, 0) == 7
    assert -2**31 <= xor_seed(73856093 * 999, 19349663 * -999, 42 * 1000003) < 2**31


def test_pm_step():
    assert pm_next(1) == 16807
    assert pm_next(M - 1) == M - 16807
    assert pm_next(0) == 0


def test_seed_for_level():
    assert seed_for_level(1, 1) == 16588509
    assert seed_for_level(1, 2) == 16722965 == (pm_next(9) + LEVEL_SEED_SALT) % M
    assert seed_for_level(1, 1) == seed_for_level(1, 1)
    seeds = {seed_for_level(7, lvl) for lvl in range(1, 30)}
    assert len(seeds) == 29
    assert all(1 <= s < M for s in seeds)
    with pytest.raises(ValueError):
        seed_for_level(1, 0)


def test_random_level_seed_uses_given_source():
    a = random_level_seed(random.Random(3))
    b = random_level_seed(random.Random(3))
    assert a == b
    assert 0 <= a < M
