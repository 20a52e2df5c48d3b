# ebfs/state.py
from __future__ import annotations
from collections import deque
from typing import Deque, Dict, Optional
from .types import Coord

class SearchState:
    """
    Mutable record of one search run:
    - frontier: FIFO queue of discovered cells awaiting expansion
    - visited: every cell ever discovered, in discovery order
    - early_exit_visited: the part of visited discovered before the target
    - came_from: discovering parent of each visited cell (origin -> None)
    Only the step engine writes to it.
    """
    def __init__(self) -> None:
        self.frontier: Deque[Coord] = deque()
        self.visited: Dict[Coord, bool] = {}
        self.early_exit_visited: Dict[Coord, bool] = {}
        self.came_from: Dict[Coord, Optional[Coord]] = {}
        self.expansions = 0

    def reset(self) -> None:
        self.frontier.clear()
        self.visited.clear()
        self.early_exit_visited.clear()
        self.came_from.clear()
        self.expansions = 0

    def is_seeded(self) -> bool:
        return bool(self.visited)

    def is_exhausted(self) -> bool:
        return self.is_seeded() and not self.frontier

    def depth(self, s: Coord) -> Optional[int]:
        """Length of the predecessor chain from `s` back to the origin, None if undiscovered."""
        if s not in self.came_from:
            return None
        d = 0
        cur = self.came_from[s]
        while cur is not None:
            d += 1
            cur = self.came_from[cur]
        return d
