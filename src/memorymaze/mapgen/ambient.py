# src/memorymaze/mapgen/ambient.py
# Ambient (random) item spawns on floor tiles. Pure per (tile, level seed):
# the renderer asks for the same tile every frame and must get the same answer.

from __future__ import annotations

from typing import Callable, Collection, List, Mapping, Optional, Sequence, Tuple

from ..config import PROCGEN, ProcGenConfig
from ..items import ItemDef
from ..rng import hash01, xor_seed
from ..tiles import FLOOR, tile_key


class AmbientRoller:
    """
    Weighted rarity table, normalised once. Catalogue order is the tie-break
    order and must not be re-sorted.
    """

    def __init__(self, catalogue: Sequence[ItemDef], cfg: ProcGenConfig = PROCGEN) -> None:
        self.catalogue: Tuple[ItemDef, ...] = tuple(catalogue)
        self.cfg = cfg
        self.total_rarity = sum(i.rarity for i in self.catalogue)
        self.shares: List[float] = [i.rarity / self.total_rarity for i in self.catalogue] if self.total_rarity else []
        bounds: List[float] = []
        acc = 0.0
        for s in self.shares:
            acc += s
            bounds.append(acc)
        self.bounds = bounds

    def tile_seed(self, tx: int, ty: int, level_seed: int) -> int:
        c = self.cfg
        return xor_seed(tx * c.item_seed_x, ty * c.item_seed_y, level_seed * c.item_level_multiplier)

    def pick(self, roll: float) -> Optional[ItemDef]:
        for item, bound in zip(self.catalogue, self.bounds):
            if roll <= bound:
                return item
        # float drift can leave the last bound a hair under 1.0
        return None

    def roll(self, tx: int, ty: int, level_seed: int) -> Optional[ItemDef]:
        seed = self.tile_seed(tx, ty, level_seed)
        if hash01(seed) > self.cfg.spawn_chance:
            return None
        return self.pick(hash01(seed + 1))


def resolve_item(
    tx: int,
    ty: int,
    level_seed: int,
    *,
    classify: Callable[[int, int], int],
    reserved: Mapping[str, ItemDef],
    collected: Collection[str],
    roller: AmbientRoller,
) -> Optional[ItemDef]:
    """collected > wall > reservation > ambient roll."""
    key = tile_key(tx, ty)
    if key in collected:
        return None
    if classify(tx, ty) != FLOOR:
        return None
    item = reserved.get(key)
    if item is not None:
        return item
    return roller.roll(tx, ty, level_seed)
