# Canonical tile ids + tile-key helpers

from typing import Tuple

XY = Tuple[int, int]

FLOOR = 0
WALL = 1


def tile_key(tx: int, ty: int) -> str:
    return f"{tx},{ty}"


def parse_tile_key(key: str) -> XY:
    tx, ty = key.split(",")
    return int(tx), int(ty)
