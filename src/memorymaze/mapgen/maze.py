# src/memorymaze/mapgen/maze.py
# Infinite macro-cell maze. Nothing is stored: every tile is recomputed from
# (tx, ty, level_seed) in O(1).
#
# Local layout of one 4x4 macro cell (lx across, ly down):
#
#   W d d W      d = opens if the cell above has open_down
#   r F F R      r = opens if the cell to the left has open_right
#   r F F R      R = opens if this cell has open_right
#   W D D W      D = opens if this cell has open_down
#
# F (the 2x2 centre) is always floor, W (corners) is always wall.

from dataclasses import dataclass

from ..config import PROCGEN, ProcGenConfig
from ..rng import hash01, xor_seed
from ..tiles import FLOOR, WALL


@dataclass(frozen=True)
class CellLinks:
    open_right: bool
    open_down: bool


def cell_seed(cx: int, cy: int, level_seed: int, cfg: ProcGenConfig = PROCGEN) -> int:
    return xor_seed(cx * cfg.prime_x, cy * cfg.prime_y, level_seed * cfg.level_multiplier)


def cell_links(cx: int, cy: int, level_seed: int, cfg: ProcGenConfig = PROCGEN) -> CellLinks:
    """Every cell links to at least one neighbour; both when the roll lands high."""
    r = hash01(cell_seed(cx, cy, level_seed, cfg))
    right_only, down_only = cfg.link_thresholds
    if r < right_only:
        return CellLinks(open_right=True, open_down=False)
    if r < down_only:
        return CellLinks(open_right=False, open_down=True)
    return CellLinks(open_right=True, open_down=True)


def to_cell(tx: int, ty: int, cfg: ProcGenConfig = PROCGEN):
    """Return (cx, cy, lx, ly). Floor-div/mod so negatives behave like positives."""
    n = cfg.cell_size
    return tx // n, ty // n, tx % n, ty % n


def classify_tile(tx: int, ty: int, level_seed: int, cfg: ProcGenConfig = PROCGEN) -> int:
    cx, cy, lx, ly = to_cell(tx, ty, cfg)
    last = cfg.cell_size - 1
    mid_x = 0 < lx < last
    mid_y = 0 < ly < last

    if mid_x and mid_y:
        return FLOOR

    # Horizontal openings (left/right border, middle rows)
    if mid_y:
        if lx == 0 and cell_links(cx - 1, cy, level_seed, cfg).open_right:
            return FLOOR
        if lx == last and cell_links(cx, cy, level_seed, cfg).open_right:
            return FLOOR

    # Vertical openings (top/bottom border, middle columns)
    if mid_x:
        if ly == 0 and cell_links(cx, cy - 1, level_seed, cfg).open_down:
            return FLOOR
        if ly == last and cell_links(cx, cy, level_seed, cfg).open_down:
            return FLOOR

    return WALL


def is_floor(tx: int, ty: int, level_seed: int, cfg: ProcGenConfig = PROCGEN) -> bool:
    return classify_tile(tx, ty, level_seed, cfg) == FLOOR


@dataclass(frozen=True)
class Maze:
    """A level seed bound to a config; hands out plain callables."""
    level_seed: int
    cfg: ProcGenConfig = PROCGEN

    def classify(self, tx: int, ty: int) -> int:
        return classify_tile(tx, ty, self.level_seed, self.cfg)

    def is_floor(self, tx: int, ty: int) -> bool:
        return classify_tile(tx, ty, self.level_seed, self.cfg) == FLOOR
