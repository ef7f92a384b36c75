# src/memorymaze/mapgen/spawn.py
# Nearest safe spawn tile, spiralling out from the origin.

import logging
from typing import Callable, Iterator

from ..tiles import XY

logger = logging.getLogger(__name__)

TilePredicate = Callable[[int, int], bool]


def ring(r: int) -> Iterator[XY]:
    """
    Tiles at Chebyshev distance r from the origin, tx ascending then ty
    ascending. Same visiting order as sweeping the full (2r+1)^2 square,
    minus the interior that earlier rings already covered.
    """
    if r == 0:
        yield (0, 0)
        return
    for tx in range(-r, r + 1):
        if tx in (-r, r):
            for ty in range(-r, r + 1):
                yield (tx, ty)
        else:
            yield (tx, -r)
            yield (tx, r)


def find_spawn_tile(is_floor: TilePredicate, fits: TilePredicate, max_radius: int = 120) -> XY:
    """
    First tile that is floor AND whose collision box (sprite footprint, not
    just the anchor tile) is clear of walls. Falls back to the origin.
    """
    for r in range(max_radius):
        for tx, ty in ring(r):
            if is_floor(tx, ty) and fits(tx, ty):
                return (tx, ty)
    logger.warning("No spawn tile within radius %d; falling back to origin", max_radius)
    return (0, 0)
