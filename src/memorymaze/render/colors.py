# src/memorymaze/render/colors.py
# Flat RGBA palette shared by the pygame viewer and the Pillow renderer.
from typing import Tuple

from ..items import ItemDef, ItemKind
from ..tiles import FLOOR

RGBA = Tuple[int, int, int, int]

TILE_COLORS = {
    FLOOR: (220, 220, 220, 255),
}
WALL_COLOR: RGBA = (40, 44, 52, 255)
SPAWN_COLOR: RGBA = (0, 160, 255, 255)

KIND_COLORS = {
    ItemKind.PLAIN:  (255, 200,   0, 255),   # targets
    ItemKind.HEALTH: ( 80, 200, 120, 255),
    ItemKind.SPEED:  ( 90, 160, 255, 255),
}
DAMAGE_COLOR: RGBA = (220, 60, 60, 255)
RESERVED_RING: RGBA = (255, 80, 200, 255)


def tile_color(tile: int) -> RGBA:
    return TILE_COLORS.get(tile, WALL_COLOR)


def item_color(item: ItemDef) -> RGBA:
    if item.kind is ItemKind.HEALTH and item.health < 0:
        return DAMAGE_COLOR
    return KIND_COLORS[item.kind]
