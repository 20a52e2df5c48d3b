# ebfs/grid.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple
import logging
import random, os
from .types import Coord

logger = logging.getLogger(__name__)

@dataclass
class Grid:
    width: int
    height: int
    walls: Set[Coord] = field(default_factory=set)
    cell_size: int = 40  # rendering only

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.width}x{self.height}")
        walls = set(self.walls)
        self.walls = {w for w in walls if self.in_bounds(w)}
        if len(self.walls) != len(walls):
            logger.debug("dropped %d out-of-bounds walls", len(walls) - len(self.walls))

    @property
    def area(self) -> int:
        return self.width * self.height

    def in_bounds(self, s: Coord) -> bool:
        x, y = s
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, s: Coord) -> bool:
        return s in self.walls

    def add_wall(self, s: Coord) -> bool:
        """Mark `s` impassable. Returns False when out of bounds or already a wall."""
        if not self.in_bounds(s) or s in self.walls:
            return False
        self.walls.add(s)
        return True

    def remove_wall(self, s: Coord) -> bool:
        if s not in self.walls:
            return False
        self.walls.discard(s)
        return True

    def neighbors(self, s: Coord) -> List[Coord]:
        x, y = s
        cand = [(x, y - 1), (x - 1, y), (x, y + 1), (x + 1, y)]
        return [p for p in cand if self.in_bounds(p)]

    def cells(self) -> Iterable[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def copy(self) -> "Grid":
        return Grid(self.width, self.height, set(self.walls), self.cell_size)

    @staticmethod
    def random(width: int = 15, height: int = 15, p_wall: float = 0.30,
               seed: Optional[int] = None,
               keep_open: Iterable[Coord] = ()) -> "Grid":
        rng = random.Random(seed)
        walls = {(x, y) for y in range(height) for x in range(width) if rng.random() < p_wall}
        walls -= set(keep_open)
        return Grid(width, height, walls)

    @staticmethod
    def load(path: str) -> Tuple["Grid", Coord, Coord]:
        """
        Read a grid file: a `GRID w h ox oy tx ty` header followed by
        `h` rows of `w` characters, '1' for a wall and '0' for open.
        Returns the grid with the origin and target it names.
        """
        with open(path, "r") as f:
            lines = [line.strip() for line in f if line.strip()]
        if not lines:
            raise ValueError(f"{path}: empty grid file")

        header = lines[0].split()
        if len(header) != 7 or header[0] != "GRID":
            raise ValueError(f"{path}: expected 'GRID w h ox oy tx ty' header, got {lines[0]!r}")
        try:
            w, h, ox, oy, tx, ty = map(int, header[1:])
        except ValueError:
            raise ValueError(f"{path}: non-integer value in header {lines[0]!r}") from None

        rows = lines[1:]
        if len(rows) != h:
            raise ValueError(f"{path}: expected {h} rows, got {len(rows)}")
        walls: Set[Coord] = set()
        for y, row in enumerate(rows):
            if len(row) != w or set(row) - {"0", "1"}:
                raise ValueError(f"{path}: bad row {y}: {row!r}")
            walls.update((x, y) for x, c in enumerate(row) if c == "1")
        return Grid(w, h, walls), (ox, oy), (tx, ty)

    def save(self, path: str, origin: Coord, target: Coord) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w") as f:
            f.write(f"GRID {self.width} {self.height} {origin[0]} {origin[1]} {target[0]} {target[1]}\n")
            for y in range(self.height):
                f.write("".join("1" if (x, y) in self.walls else "0" for x in range(self.width)) + "\n")
