from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ProcGenConfig:
    # Macro cells are 4x4 tiles; the 2x2 centre is always floor.
    cell_size: int = 4
    prime_x: int = 73856093
    prime_y: int = 19349663
    level_multiplier: int = 1000003
    # Ambient item hash
    item_seed_x: int = 1234567
    item_seed_y: int = 9876543
    item_level_multiplier: int = 2000003
    spawn_chance: float = 0.08
    # r < first -> right only, r < second -> down only, else both.
    # Tuned for maze density, not derived.
    link_thresholds: Tuple[float, float] = (0.33, 0.66)

    def __post_init__(self) -> None:
        if self.cell_size < 4:
            raise ValueError("cell_size must be >= 4")
        lo, hi = self.link_thresholds
        if not (0.0 <= lo <= hi <= 1.0):
            raise ValueError("link_thresholds must satisfy 0 <= first <= second <= 1")


@dataclass(frozen=True)
class PlacementConfig:
    min_same_type: int = 4
    min_same_type_fallback: int = 2
    min_from_spawn: int = 2
    max_from_spawn: int = 500
    use_euclidean: bool = False
    # Picks per tier are also capped by the number of ranked candidates
    # (4 per target), so with the shipped catalogue neither budget binds.
    max_attempts: int = 2000
    relaxed_attempts: int = 3000
    relax_on_failure: bool = True
    top_slice: int = 100

    # Candidate harvest (radius in tiles around the origin)
    candidates_per_item: int = 4
    min_candidates_per_item: int = 2
    harvest_radius: int = 160
    harvest_radius_per_item: int = 3
    harvest_radius_step: int = 40
    harvest_radius_cap: int = 400

    # Scoring (primary tier)
    base_score: float = 100.0
    spawn_bonus: float = 100.0
    spawn_bonus_falloff: float = 2.0
    same_type_weight: float = 5.0
    spread_weight: float = 2.0
    # Scoring (relaxed / final tiers)
    relaxed_base_score: float = 50.0
    relaxed_same_type_weight: float = 3.0
    relaxed_spread_weight: float = 1.0

    # Seed salts for the weighted pick and the shuffle
    shuffle_multiplier: int = 1000007
    pick_multiplier: int = 1000009
    pick_item_stride: int = 10007
    relaxed_pick_offset: int = 10000

    @property
    def ideal_from_spawn(self) -> float:
        return (self.min_from_spawn + self.max_from_spawn) / 2


@dataclass(frozen=True)
class PhysicsConfig:
    tile_size: int = 64
    pickup_radius: float = 50.0
    spawn_search_radius: int = 120


@dataclass(frozen=True)
class SpriteConfig:
    width: int = 128
    height: int = 258
    scale: float = 0.5


@dataclass(frozen=True)
class CollisionConfig:
    # Rectangle at the sprite's feet, in pixels
    width: int = 32
    height: int = 48
    vertical_offset: int = 52


# Defaults (swap with dataclasses.replace for experiments)
PROCGEN = ProcGenConfig()
PLACEMENT = PlacementConfig()
PHYSICS = PhysicsConfig()
SPRITE = SpriteConfig()
COLLISION = CollisionConfig()
