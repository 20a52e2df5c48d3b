# ebfs/engine.py
from __future__ import annotations
from enum import Enum
from typing import List, Optional
import logging

from .types import Coord
from .grid import Grid
from .state import SearchState
from .heuristics import chebyshev

logger = logging.getLogger(__name__)

class EngineStatus(Enum):
    UNSEEDED = "unseeded"
    RUNNING = "running"
    EXHAUSTED = "exhausted"

class StepEngine:
    """
    Breadth-first search over `grid` that advances one frontier pop at a time.

    Newly discovered neighbors are queued in order of Chebyshev distance from
    the origin so that same-depth cells are discovered outward from the origin.
    With `early_exit` set, `state.early_exit_visited` stops growing once the
    target has been visited; the search itself carries on.
    """
    def __init__(self, grid: Grid, state: SearchState, origin: Coord,
                 target: Optional[Coord] = None, early_exit: bool = False):
        self.grid = grid
        self.state = state
        self.origin = origin
        self.target = target
        self.early_exit = early_exit

    @property
    def status(self) -> EngineStatus:
        if not self.state.is_seeded():
            return EngineStatus.UNSEEDED
        if not self.state.frontier:
            return EngineStatus.EXHAUSTED
        return EngineStatus.RUNNING

    def seed(self) -> None:
        st = self.state
        if st.visited:
            return
        st.visited[self.origin] = True
        if self.early_exit:
            st.early_exit_visited[self.origin] = True
        st.frontier.append(self.origin)
        st.came_from[self.origin] = None

    def ordered_neighbors(self, s: Coord) -> List[Coord]:
        # sorted() is stable: equal distances keep up/left/down/right order
        return sorted(self.grid.neighbors(s), key=lambda nb: chebyshev(nb, self.origin))

    def step(self) -> bool:
        """Pop one frontier cell and discover its neighbors. Returns False once exhausted."""
        self.seed()
        st = self.state
        if not st.frontier:
            return False

        cur = st.frontier.popleft()
        st.expansions += 1
        for nb in self.ordered_neighbors(cur):
            if nb in st.visited or self.grid.is_wall(nb):
                continue
            st.visited[nb] = True
            if self.early_exit and self.target not in st.visited:
                st.early_exit_visited[nb] = True
            st.frontier.append(nb)
            st.came_from[nb] = cur

        if not st.frontier:
            logger.debug("search from %s exhausted after %d expansions (%d visited)",
                         self.origin, st.expansions, len(st.visited))
        return True

    def run_steps(self, n: int) -> int:
        """Call step() up to `n` times; returns how many popped a cell."""
        done = 0
        for _ in range(max(n, 0)):
            if not self.step():
                break
            done += 1
        return done

    def run_to_exhaustion(self, max_steps: Optional[int] = None) -> int:
        if max_steps is None:
            max_steps = self.grid.area
        return self.run_steps(max_steps)
