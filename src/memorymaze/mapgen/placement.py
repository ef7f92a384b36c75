# src/memorymaze/mapgen/placement.py
# Guaranteed placement: one floor tile per target item, spread away from the
# spawn and from each other, with two relaxation tiers so placement always
# terminates.

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Set

from ..config import PLACEMENT, PlacementConfig
from ..items import ItemDef
from ..rng import hash01
from ..tiles import XY

logger = logging.getLogger(__name__)

TilePredicate = Callable[[int, int], bool]


class Tier(Enum):
    PRIMARY = "primary"
    RELAXED = "relaxed"
    FINAL = "final"


@dataclass
class Placement:
    item: ItemDef
    tile: XY
    tier: Tier


@dataclass
class PlacementPlan:
    spawn: XY
    placements: List[Placement] = field(default_factory=list)
    unplaced: List[ItemDef] = field(default_factory=list)
    candidates: int = 0

    @property
    def reservations(self) -> Dict[XY, ItemDef]:
        return {p.tile: p.item for p in self.placements}

    @property
    def tiers(self) -> Dict[str, Tier]:
        # first placement wins when an id repeats
        out: Dict[str, Tier] = {}
        for p in self.placements:
            out.setdefault(p.item.id, p.tier)
        return out

    def tier_of(self, item_id: str) -> Optional[Tier]:
        for p in self.placements:
            if p.item.id == item_id:
                return p.tier
        return None


# ---------- Geometry ----------

def distance(x1: int, y1: int, x2: int, y2: int, euclidean: bool = False) -> float:
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    if euclidean:
        return math.sqrt(dx * dx + dy * dy)
    return dx + dy


# ---------- Candidate harvest ----------

def collect_floor_tiles(
    needed: int,
    radius: int,
    is_floor: TilePredicate,
    spawn: XY,
    cfg: PlacementConfig = PLACEMENT,
) -> List[XY]:
    """
    Square rings around the origin (not the spawn): top/bottom rows first,
    then the side columns without their corners. Keeps floor tiles whose
    spawn distance is inside [min_from_spawn, max_from_spawn].
    """
    tiles: List[XY] = []
    seen: Set[XY] = set()
    sx, sy = spawn

    def add(tx: int, ty: int) -> None:
        if (tx, ty) in seen:
            return
        if not is_floor(tx, ty):
            return
        d = distance(sx, sy, tx, ty, cfg.use_euclidean)
        if d < cfg.min_from_spawn or d > cfg.max_from_spawn:
            return
        tiles.append((tx, ty))
        seen.add((tx, ty))

    r = 0
    while r <= radius and len(tiles) < needed:
        for tx in range(-r, r + 1):
            if len(tiles) >= needed:
                break
            add(tx, -r)
            add(tx, r)
        for ty in range(-r + 1, r):
            if len(tiles) >= needed:
                break
            add(-r, ty)
            add(r, ty)
        r += 1
    return tiles


def harvest_candidates(
    required: int,
    is_floor: TilePredicate,
    spawn: XY,
    cfg: PlacementConfig = PLACEMENT,
) -> List[XY]:
    needed = required * cfg.candidates_per_item
    radius = max(cfg.harvest_radius, required * cfg.harvest_radius_per_item)
    tiles = collect_floor_tiles(needed, radius, is_floor, spawn, cfg)
    # Sparse neighbourhood: widen the search a step at a time, up to the cap
    while len(tiles) < required * cfg.min_candidates_per_item and radius <= cfg.harvest_radius_cap:
        radius += cfg.harvest_radius_step
        tiles = collect_floor_tiles(needed, radius, is_floor, spawn, cfg)
    return tiles


def seeded_shuffle(tiles: Sequence[XY], seed: int, multiplier: int = PLACEMENT.shuffle_multiplier) -> List[XY]:
    """Fisher-Yates driven by the hash RNG; returns a new list."""
    out = list(tiles)
    for i in range(len(out) - 1, 0, -1):
        j = math.floor(hash01(seed * multiplier + i) * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


# ---------- Scoring ----------

def _nearest(tile: XY, others: Sequence[XY], euclidean: bool) -> float:
    tx, ty = tile
    return min(distance(ox, oy, tx, ty, euclidean) for ox, oy in others)


def _mean(tile: XY, others: Sequence[XY], euclidean: bool) -> float:
    tx, ty = tile
    return sum(distance(ox, oy, tx, ty, euclidean) for ox, oy in others) / len(others)


def score_tile(
    tile: XY,
    spawn: XY,
    taken: Set[XY],
    placed: Sequence[XY],
    same_type: Sequence[XY],
    min_same_type: float,
    is_floor: TilePredicate,
    cfg: PlacementConfig = PLACEMENT,
) -> float:
    """Primary-tier desirability. 0 means the tile is not allowed."""
    if tile in taken or not is_floor(*tile):
        return 0.0
    eu = cfg.use_euclidean
    d = distance(spawn[0], spawn[1], tile[0], tile[1], eu)
    if d < cfg.min_from_spawn or d > cfg.max_from_spawn:
        return 0.0
    if same_type and _nearest(tile, same_type, eu) < min_same_type:
        return 0.0

    score = cfg.base_score
    score += max(0.0, cfg.spawn_bonus - abs(d - cfg.ideal_from_spawn) * cfg.spawn_bonus_falloff)
    if same_type:
        score += _nearest(tile, same_type, eu) * cfg.same_type_weight
    if placed:
        score += _mean(tile, placed, eu) * cfg.spread_weight
    return score


def score_tile_relaxed(
    tile: XY,
    spawn: XY,
    taken: Set[XY],
    placed: Sequence[XY],
    same_type: Sequence[XY],
    min_same_type: float,
    min_from_spawn: float,
    is_floor: TilePredicate,
    cfg: PlacementConfig = PLACEMENT,
    max_from_spawn: Optional[float] = PLACEMENT.max_from_spawn,
) -> float:
    """Fallback desirability: lower base, no spawn-distance bonus."""
    if tile in taken or not is_floor(*tile):
        return 0.0
    eu = cfg.use_euclidean
    d = distance(spawn[0], spawn[1], tile[0], tile[1], eu)
    if d < min_from_spawn:
        return 0.0
    if max_from_spawn is not None and d > max_from_spawn:
        return 0.0
    if min_same_type > 0 and same_type and _nearest(tile, same_type, eu) < min_same_type:
        return 0.0

    score = cfg.relaxed_base_score
    if same_type:
        score += _nearest(tile, same_type, eu) * cfg.relaxed_same_type_weight
    if placed:
        score += _mean(tile, placed, eu) * cfg.relaxed_spread_weight
    return score


def ranked(tiles: Sequence[XY], score_fn: Callable[[XY], float]) -> List[XY]:
    """Valid tiles, best first. Stable, so shuffle order breaks ties."""
    scored = [(score_fn(t), t) for t in tiles]
    scored = [st for st in scored if st[0] > 0]
    scored.sort(key=lambda st: st[0], reverse=True)
    return [t for _, t in scored]


def weighted_index(seed: int, top_n: int) -> int:
    # Squaring the roll skews toward index 0 (the best tiles)
    return math.floor(hash01(seed) ** 2 * top_n)


# ---------- Planner ----------

class _Planner:
    def __init__(
        self,
        targets: Sequence[ItemDef],
        is_floor: TilePredicate,
        spawn: XY,
        level_seed: int,
        cfg: PlacementConfig,
    ) -> None:
        self.targets = targets
        self.is_floor = is_floor
        self.spawn = spawn
        self.level_seed = level_seed
        self.cfg = cfg
        self.taken: Set[XY] = set()
        self.placed: List[XY] = []
        self.by_type: Dict[str, List[XY]] = {}
        self.plan = PlacementPlan(spawn=spawn)

    def run(self) -> PlacementPlan:
        cfg = self.cfg
        candidates = harvest_candidates(len(self.targets), self.is_floor, self.spawn, cfg)
        self.plan.candidates = len(candidates)
        logger.debug("Placement: %d candidates for %d targets", len(candidates), len(self.targets))
        tiles = seeded_shuffle(candidates, self.level_seed, cfg.shuffle_multiplier)

        for i, item in enumerate(self.targets):
            tile = self._primary(i, item, tiles)
            tier = Tier.PRIMARY
            if tile is None and cfg.relax_on_failure:
                tile = self._relaxed(i, item, tiles)
                tier = Tier.RELAXED
            if tile is None:
                tile = self._final(item, tiles)
                tier = Tier.FINAL
            if tile is None:
                logger.warning("Could not place target item %r (%d candidates)", item.id, len(tiles))
                self.plan.unplaced.append(item)
                continue
            self._commit(item, tile, tier)
        return self.plan

    # -- tiers --

    def _primary(self, i: int, item: ItemDef, tiles: List[XY]) -> Optional[XY]:
        cfg = self.cfg
        min_same = cfg.min_same_type
        same = self.by_type.get(item.id, [])
        order = ranked(tiles, lambda t: score_tile(
            t, self.spawn, self.taken, self.placed, same, min_same, self.is_floor, cfg))
        return self._pick(
            i, item, order,
            attempts=cfg.max_attempts,
            salt=0,
            min_same=min_same,
            min_spawn=cfg.min_from_spawn,
            max_spawn=cfg.max_from_spawn,
        )

    def _relaxed(self, i: int, item: ItemDef, tiles: List[XY]) -> Optional[XY]:
        cfg = self.cfg
        min_same = max(cfg.min_same_type_fallback, cfg.min_same_type // 2)
        min_spawn = max(1, cfg.min_from_spawn // 2)
        same = self.by_type.get(item.id, [])
        order = ranked(tiles, lambda t: score_tile_relaxed(
            t, self.spawn, self.taken, self.placed, same, min_same, min_spawn,
            self.is_floor, cfg, cfg.max_from_spawn))
        return self._pick(
            i, item, order,
            attempts=cfg.relaxed_attempts,
            salt=cfg.relaxed_pick_offset,
            min_same=min_same,
            min_spawn=min_spawn,
            max_spawn=None,
        )

    def _final(self, item: ItemDef, tiles: List[XY]) -> Optional[XY]:
        cfg = self.cfg
        min_same = cfg.min_same_type_fallback
        same = self.by_type.get(item.id, [])
        best: Optional[XY] = None
        best_score = -1.0
        for t in tiles:
            if t in self.taken or not self.is_floor(*t):
                continue
            if same and _nearest(t, same, cfg.use_euclidean) < min_same:
                continue
            s = score_tile_relaxed(
                t, self.spawn, self.taken, self.placed, same, min_same, 0,
                self.is_floor, cfg, max_from_spawn=None)
            if s > best_score:
                best, best_score = t, s
        return best

    # -- helpers --

    def _pick(
        self,
        i: int,
        item: ItemDef,
        order: List[XY],
        *,
        attempts: int,
        salt: int,
        min_same: float,
        min_spawn: float,
        max_spawn: Optional[float],
    ) -> Optional[XY]:
        if not order:
            return None
        cfg = self.cfg
        top_n = min(cfg.top_slice, len(order))
        same = self.by_type.get(item.id, [])
        base = self.level_seed * cfg.pick_multiplier + i * cfg.pick_item_stride + salt
        for attempt in range(min(attempts, len(order))):
            tile = order[weighted_index(base + attempt, top_n)]
            if tile in self.taken:
                continue
            d = distance(self.spawn[0], self.spawn[1], tile[0], tile[1], cfg.use_euclidean)
            if d < min_spawn or (max_spawn is not None and d > max_spawn):
                continue
            if same and _nearest(tile, same, cfg.use_euclidean) < min_same:
                continue
            if not self.is_floor(*tile):
                continue
            return tile
        return None

    def _commit(self, item: ItemDef, tile: XY, tier: Tier) -> None:
        self.taken.add(tile)
        self.placed.append(tile)
        self.by_type.setdefault(item.id, []).append(tile)
        self.plan.placements.append(Placement(item=item, tile=tile, tier=tier))
        logger.debug("Placed %s at %s (%s)", item.id, tile, tier.value)


def plan_placements(
    targets: Sequence[ItemDef],
    is_floor: TilePredicate,
    spawn: XY,
    level_seed: int,
    cfg: PlacementConfig = PLACEMENT,
) -> PlacementPlan:
    """
    Reserve one floor tile per target item, in order.

    Never raises; an item that fits nowhere in the harvested candidates is
    reported in ``plan.unplaced``.
    """
    if not targets:
        return PlacementPlan(spawn=spawn)
    return _Planner(targets, is_floor, spawn, level_seed, cfg).run()
