# src/memorymaze/engine/collisions.py
# Pixel-space adapters over the tile classifier (no pygame). Player physics
# lives outside the core; it only asks "is this pixel a wall" and "does the
# sprite at (sx, sy) overlap a wall".

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple

from ..config import COLLISION, PHYSICS, SPRITE, CollisionConfig, PhysicsConfig, SpriteConfig
from ..tiles import WALL, XY

Classify = Callable[[int, int], int]


@dataclass(frozen=True)
class Box:
    left: float
    top: float
    right: float
    bottom: float

    def corners(self) -> Tuple[Tuple[float, float], ...]:
        return (
            (self.left, self.top),
            (self.right, self.top),
            (self.left, self.bottom),
            (self.right, self.bottom),
        )


def pixel_to_tile(px: float, py: float, tile_size: int = PHYSICS.tile_size) -> XY:
    return int(math.floor(px / tile_size)), int(math.floor(py / tile_size))


def tile_to_pixel(tx: int, ty: int, tile_size: int = PHYSICS.tile_size) -> XY:
    return tx * tile_size, ty * tile_size


def collision_box(
    sx: float,
    sy: float,
    sprite: SpriteConfig = SPRITE,
    box: CollisionConfig = COLLISION,
) -> Box:
    """Feet rectangle for a sprite whose top-left corner is (sx, sy)."""
    cx = sx + (sprite.width * sprite.scale) / 2
    top = sy + sprite.height * sprite.scale - box.vertical_offset
    half = box.width / 2
    return Box(left=cx - half, top=top, right=cx + half, bottom=top + box.height)


def is_wall(px: float, py: float, classify: Classify, tile_size: int = PHYSICS.tile_size) -> bool:
    tx, ty = pixel_to_tile(px, py, tile_size)
    return classify(tx, ty) == WALL


def check_collision(
    sx: float,
    sy: float,
    classify: Classify,
    physics: PhysicsConfig = PHYSICS,
    sprite: SpriteConfig = SPRITE,
    box: CollisionConfig = COLLISION,
) -> bool:
    for px, py in collision_box(sx, sy, sprite, box).corners():
        if is_wall(px, py, classify, physics.tile_size):
            return True
    return False


def tiles_in_reach(
    cx: float,
    cy: float,
    physics: PhysicsConfig = PHYSICS,
) -> Iterator[XY]:
    """
    Tiles in the 3x3 block around the pixel point (cx, cy) whose centre is
    strictly closer than pickup_radius.
    """
    size = physics.tile_size
    gx, gy = pixel_to_tile(cx, cy, size)
    half = size / 2
    limit = physics.pickup_radius ** 2
    for ty in range(gy - 1, gy + 2):
        for tx in range(gx - 1, gx + 2):
            dx = cx - (tx * size + half)
            dy = cy - (ty * size + half)
            if dx * dx + dy * dy < limit:
                yield (tx, ty)
