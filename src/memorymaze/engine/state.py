# src/memorymaze/engine/state.py
# World facade: owns the level seed, the reservation table and the collected
# set. Everything else is recomputed from those three on demand.

from __future__ import annotations

import logging
import random
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from ..config import (
    COLLISION, PHYSICS, PLACEMENT, PROCGEN, SPRITE,
    CollisionConfig, PhysicsConfig, PlacementConfig, ProcGenConfig, SpriteConfig,
)
from ..items import CATALOGUE, ItemDef, target_items
from ..mapgen.ambient import AmbientRoller, resolve_item
from ..mapgen.maze import Maze
from ..mapgen.placement import PlacementPlan, plan_placements
from ..mapgen.spawn import find_spawn_tile
from ..rng import random_level_seed, seed_for_level
from ..tiles import FLOOR, XY, tile_key
from . import collisions

logger = logging.getLogger(__name__)


class World:
    def __init__(
        self,
        catalogue: Sequence[ItemDef] = CATALOGUE,
        *,
        seed: Optional[int] = None,
        base_seed: Optional[int] = None,
        seed_source: Optional[random.Random] = None,
        procgen: ProcGenConfig = PROCGEN,
        placement: PlacementConfig = PLACEMENT,
        physics: PhysicsConfig = PHYSICS,
        sprite: SpriteConfig = SPRITE,
        collision: CollisionConfig = COLLISION,
    ) -> None:
        self.catalogue: Tuple[ItemDef, ...] = tuple(catalogue)
        self.procgen = procgen
        self.placement = placement
        self.physics = physics
        self.sprite = sprite
        self.collision = collision

        # Level seed sources, in priority order: explicit > base_seed stream > random
        self.base_seed = base_seed
        self._seed_source = seed_source or random.Random()

        # Rarity table is built once per catalogue, not per query
        self.roller = AmbientRoller(self.catalogue, procgen)
        self.target_pool: Tuple[ItemDef, ...] = target_items(self.catalogue)

        # Per-level state (rebuilt by reset)
        self.level = 1
        self.level_seed = 0
        self.maze = Maze(0, procgen)
        self.collected_tiles: Set[str] = set()
        self.reservations: Dict[str, ItemDef] = {}
        self.found_targets: Set[str] = set()
        self.plan: Optional[PlacementPlan] = None
        self.spawn_tile: XY = (0, 0)

        self.reset(1, seed=seed)

    # ---- Lifecycle ----
    def _choose_seed(self, level: int, seed: Optional[int]) -> int:
        if seed is not None:
            return seed
        if self.base_seed is not None:
            return seed_for_level(self.base_seed, level)
        return random_level_seed(self._seed_source)

    def reset(self, level: int = 1, seed: Optional[int] = None) -> None:
        """New level: fresh seed, empty collected set, placement re-run."""
        if level < 1:
            raise ValueError("level must be >= 1")
        self.level = level
        self.level_seed = self._choose_seed(level, seed)
        self.maze = Maze(self.level_seed, self.procgen)
        self.collected_tiles.clear()
        self.found_targets.clear()
        self.reservations.clear()

        self.spawn_tile = find_spawn_tile(
            self.maze.is_floor, self._spawn_fits, self.physics.spawn_search_radius
        )
        self.plan = plan_placements(
            self.target_pool, self.maze.is_floor, self.spawn_tile, self.level_seed, self.placement
        )
        for p in self.plan.placements:
            self.reservations[tile_key(*p.tile)] = p.item

        if self.plan.unplaced:
            # Win condition shrinks to what was actually placed
            logger.warning(
                "Level %d (seed %d): %d target item(s) unplaced: %s",
                level, self.level_seed, len(self.plan.unplaced),
                ", ".join(i.id for i in self.plan.unplaced),
            )
        logger.info(
            "Level %d ready: seed=%d spawn=%s reserved=%d/%d",
            level, self.level_seed, self.spawn_tile, len(self.reservations), len(self.target_pool),
        )

    # ---- Tile queries ----
    def classify(self, tx: int, ty: int) -> int:
        return self.maze.classify(tx, ty)

    def is_floor(self, tx: int, ty: int) -> bool:
        return self.maze.classify(tx, ty) == FLOOR

    def item_at(self, tx: int, ty: int) -> Optional[ItemDef]:
        return resolve_item(
            tx, ty, self.level_seed,
            classify=self.maze.classify,
            reserved=self.reservations,
            collected=self.collected_tiles,
            roller=self.roller,
        )

    # ---- Pixel adapters ----
    def is_wall(self, px: float, py: float) -> bool:
        return collisions.is_wall(px, py, self.maze.classify, self.physics.tile_size)

    def check_collision(self, sx: float, sy: float) -> bool:
        return collisions.check_collision(
            sx, sy, self.maze.classify, self.physics, self.sprite, self.collision
        )

    def _spawn_fits(self, tx: int, ty: int) -> bool:
        sx, sy = collisions.tile_to_pixel(tx, ty, self.physics.tile_size)
        return not self.check_collision(sx, sy)

    def find_spawn(self) -> XY:
        """Spawn point in pixels (top-left of the spawn tile)."""
        return collisions.tile_to_pixel(*self.spawn_tile, self.physics.tile_size)

    # ---- Collection ----
    def items_in_reach(self, cx: float, cy: float) -> Iterator[Tuple[int, int, ItemDef]]:
        for tx, ty in collisions.tiles_in_reach(cx, cy, self.physics):
            item = self.item_at(tx, ty)
            if item is not None:
                yield tx, ty, item

    def collect(self, tx: int, ty: int) -> Optional[ItemDef]:
        """Pick up whatever is at (tx, ty); None if nothing is there."""
        item = self.item_at(tx, ty)
        if item is None:
            return None
        self.collected_tiles.add(tile_key(tx, ty))
        if item.is_target:
            self.found_targets.add(item.id)
        return item

    @property
    def targets(self) -> List[ItemDef]:
        """Target items that received a reservation this level."""
        seen: Set[str] = set()
        out: List[ItemDef] = []
        for item in self.reservations.values():
            if item.id not in seen:
                seen.add(item.id)
                out.append(item)
        return out

    @property
    def targets_remaining(self) -> int:
        return sum(1 for i in self.targets if i.id not in self.found_targets)

    @property
    def level_complete(self) -> bool:
        return self.targets_remaining == 0
