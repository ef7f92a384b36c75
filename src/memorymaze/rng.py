import math
import random
from typing import Optional

A = 16807
M = 0x7FFFFFFF  # 2^31-1

LEVEL_SEED_SALT = 0x0FCDD36


def hash01(seed: int) -> float:
    """
    Sine-scrambled hash: frac(sin(seed) * 10000), always in [0, 1).
    Pure function of the integer; no generator state anywhere.
    """
    x = math.sin(seed) * 10000
    f = x - math.floor(x)
    # tiny negative x rounds up to exactly 1.0
    return 0.0 if f >= 1.0 else f


def to_int32(v: int) -> int:
    """Wrap v to a signed 32-bit value (two's complement)."""
    v &= 0xFFFFFFFF
    return v - 0x100000000 if (v & 0x80000000) else v


def xor_seed(*terms: int) -> int:
    # Each product is wrapped first, exactly like a 32-bit XOR would see it.
    out = 0
    for t in terms:
        out ^= to_int32(t)
    return to_int32(out)


def pm_next(state: int) -> int:
    return (state * A) % M


def seed_for_level(base_seed: int, level: int) -> int:
    """
    Reproducible level seed in 1..M-1 for (base_seed, level).
    K mixes the base seed with the level number, then one Park-Miller step.
    """
    if level < 1:
        raise ValueError("level must be >= 1")
    k = (base_seed % M) + 8 * (level - 1)
    s = (pm_next(k) + LEVEL_SEED_SALT) % M
    return s or 1


def random_level_seed(source: Optional[random.Random] = None) -> int:
    # Only picks *which* level to play; classification never touches this.
    src = source or random
    return src.randrange(0, M)
