from dataclasses import dataclass
from typing import Callable, List, Optional

from .tiles import FLOOR

VISIBLE_W, VISIBLE_H = 20, 12


@dataclass
class TileWindow:
    """A finite snapshot of the infinite map, for tools and tests."""
    buf: List[int]
    origin_x: int
    origin_y: int
    width: int = VISIBLE_W
    height: int = VISIBLE_H

    @classmethod
    def capture(
        cls,
        classify: Callable[[int, int], int],
        origin_x: int = 0,
        origin_y: int = 0,
        width: int = VISIBLE_W,
        height: int = VISIBLE_H,
    ) -> "TileWindow":
        buf = [
            classify(origin_x + x, origin_y + y)
            for y in range(height)
            for x in range(width)
        ]
        return cls(buf=buf, origin_x=origin_x, origin_y=origin_y, width=width, height=height)

    def idx(self, tx: int, ty: int) -> Optional[int]:
        x, y = tx - self.origin_x, ty - self.origin_y
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return y * self.width + x

    def get(self, tx: int, ty: int) -> int:
        i = self.idx(tx, ty)
        if i is None:
            raise IndexError(f"tile ({tx},{ty}) outside window")
        return self.buf[i]

    def floor_count(self) -> int:
        return sum(1 for t in self.buf if t == FLOOR)

    def as_matrix(self) -> List[List[int]]:
        return [self.buf[y * self.width:(y + 1) * self.width] for y in range(self.height)]

    def as_text(self, floor: str = ".", wall: str = "#") -> str:
        return "\n".join(
            "".join(floor if t == FLOOR else wall for t in row) for row in self.as_matrix()
        )
