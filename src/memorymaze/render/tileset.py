# src/memorymaze/render/tileset.py
from __future__ import annotations
from functools import lru_cache

import pygame

from ..items import ItemDef
from .colors import RESERVED_RING, item_color, tile_color


class Tileset:
    """
    Tiny cached surface factory:
      - flat colour tiles for floor / wall
      - round item markers labelled with the item id's first letter
    Surfaces are exactly (tile_size, tile_size).
    """
    def __init__(self, tile_size: int, font=None):
        self.tile_size = tile_size
        self.font = font or pygame.font.SysFont(None, max(10, tile_size // 2))

    @lru_cache(maxsize=8)
    def tile(self, tile: int) -> pygame.Surface:
        img = pygame.Surface((self.tile_size, self.tile_size), pygame.SRCALPHA)
        img.fill(tile_color(tile))
        return img

    @lru_cache(maxsize=256)
    def item(self, item: ItemDef, reserved: bool = False) -> pygame.Surface:
        s = self.tile_size
        img = pygame.Surface((s, s), pygame.SRCALPHA)
        pygame.draw.circle(img, item_color(item), (s // 2, s // 2), max(2, s // 3))
        if reserved:
            pygame.draw.circle(img, RESERVED_RING, (s // 2, s // 2), max(3, s // 2 - 1), 2)
        txt = self.font.render(item.id[:1].upper(), True, (0, 0, 0))
        img.blit(txt, txt.get_rect(center=(s // 2, s // 2)))
        return img
