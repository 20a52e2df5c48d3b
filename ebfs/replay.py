# ebfs/replay.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Set
import logging
import time

from .types import Coord
from .grid import Grid
from .state import SearchState
from .engine import StepEngine, EngineStatus
from .path import reconstruct_path

logger = logging.getLogger(__name__)

class SearchMode(Enum):
    STEPPED = "stepped"  # step cursor driven by buttons/slider
    EAGER = "eager"      # run to exhaustion, then reconstruct the path

@dataclass
class SearchConfig:
    width: int = 15
    height: int = 15
    origin: Coord = (0, 0)
    target: Coord = (0, 2)
    initial_walls: Set[Coord] = field(default_factory=set)
    mode: SearchMode = SearchMode.EAGER
    max_steps: Optional[int] = None  # defaults to width * height
    early_exit: bool = True
    cell_size: int = 40

    @staticmethod
    def from_file(path: str, **overrides) -> "SearchConfig":
        grid, origin, target = Grid.load(path)
        return SearchConfig(grid.width, grid.height, origin, target, set(grid.walls), **overrides)

@dataclass
class RunStats:
    reached: bool
    steps: int
    visited: int
    early_exit_visited: int
    path_length: int
    elapsed_sec: float

class SearchSession:
    """
    Owns the grid, the search state and the step engine, and keeps the state
    equal to a fresh run of the current origin/target/walls:
    - STEPPED: `step_count` steps, clamped to [0, max_steps]
    - EAGER: run to exhaustion, path reconstructed afterwards
    Every accepted edit throws the state away and replays from scratch.
    Mutations return True when accepted and False when ignored.
    """
    def __init__(self, config: SearchConfig):
        try:
            self.mode = SearchMode(config.mode)
        except ValueError:
            raise ValueError(f"unknown search mode: {config.mode!r}") from None
        self.config = config
        self.grid = Grid(config.width, config.height, set(config.initial_walls), config.cell_size)
        for name, cell in (("origin", config.origin), ("target", config.target)):
            if not self.grid.in_bounds(cell):
                raise ValueError(f"{name} {cell} outside {self.grid.width}x{self.grid.height} grid")

        self.max_steps = config.max_steps if config.max_steps is not None else self.grid.area
        if self.mode is SearchMode.EAGER:
            self.max_steps = max(self.max_steps, self.grid.area)
        self.max_steps = max(self.max_steps, 0)

        self.state = SearchState()
        self.engine = StepEngine(self.grid, self.state, tuple(config.origin), tuple(config.target),
                                 early_exit=config.early_exit)
        self.step_count = 0
        self._path: List[Coord] = []
        self._path_cells: Set[Coord] = set()
        self._elapsed = 0.0

        if self.mode is SearchMode.EAGER:
            self.tick()

    # ----------------- queries -----------------
    @property
    def origin(self) -> Coord:
        return self.engine.origin

    @property
    def target(self) -> Coord:
        return self.engine.target

    @property
    def status(self) -> EngineStatus:
        return self.engine.status

    @property
    def is_exhausted(self) -> bool:
        return self.state.is_exhausted()

    @property
    def target_reached(self) -> bool:
        return self.target in self.state.came_from

    @property
    def path(self) -> List[Coord]:
        return list(self._path)

    @property
    def frontier(self) -> Iterator[Coord]:
        return iter(self.state.frontier)

    def is_wall(self, s: Coord) -> bool:
        return self.grid.is_wall(s)

    def is_visited(self, s: Coord) -> bool:
        return s in self.state.visited

    def is_early_exit_visited(self, s: Coord) -> bool:
        return s in self.state.early_exit_visited

    def is_in_frontier(self, s: Coord) -> bool:
        return s in self.state.frontier

    def is_on_path(self, s: Coord) -> bool:
        return s in self._path_cells

    def predecessor(self, s: Coord) -> Optional[Coord]:
        return self.state.came_from.get(s)

    def stats(self) -> RunStats:
        return RunStats(
            reached=self.target_reached,
            steps=self.state.expansions,
            visited=len(self.state.visited),
            early_exit_visited=len(self.state.early_exit_visited),
            path_length=len(self._path),
            elapsed_sec=self._elapsed,
        )

    # ----------------- edits -----------------
    def set_origin(self, s: Coord) -> bool:
        s = tuple(s)
        if not self.grid.in_bounds(s) or s == self.engine.origin:
            return self._reject("origin", s)
        self.engine.origin = s
        self._replay()
        return True

    def set_target(self, s: Coord) -> bool:
        s = tuple(s)
        if not self.grid.in_bounds(s) or s == self.engine.target:
            return self._reject("target", s)
        self.engine.target = s
        self._replay()
        return True

    def add_wall(self, s: Coord) -> bool:
        if not self.grid.add_wall(tuple(s)):
            return self._reject("add_wall", s)
        self._replay()
        return True

    def remove_wall(self, s: Coord) -> bool:
        if not self.grid.remove_wall(tuple(s)):
            return self._reject("remove_wall", s)
        self._replay()
        return True

    def restart(self) -> bool:
        """Back to the configured origin, target and walls."""
        cfg = self.config
        self.grid.walls = {w for w in cfg.initial_walls if self.grid.in_bounds(w)}
        self.engine.origin = tuple(cfg.origin)
        self.engine.target = tuple(cfg.target)
        self.step_count = 0
        self._replay()
        return True

    # ----------------- step cursor (STEPPED) -----------------
    def set_step_count(self, n: int) -> bool:
        if self.mode is not SearchMode.STEPPED:
            return self._reject("set_step_count", n)
        n = min(max(n, 0), self.max_steps)
        if n == self.step_count:
            return False
        if n > self.step_count:
            # the current state already equals a run of step_count steps
            self.engine.run_steps(n - self.step_count)
            self.step_count = n
            self._refresh_path()
        else:
            self.step_count = n
            self._replay()
        return True

    def advance_step(self) -> bool:
        return self.set_step_count(self.step_count + 1)

    def retreat_step(self) -> bool:
        return self.set_step_count(self.step_count - 1)

    # ----------------- EAGER -----------------
    def tick(self) -> bool:
        """Run to exhaustion and rebuild the path; a no-op once computed."""
        if self.mode is not SearchMode.EAGER:
            self._refresh_path()
            return False
        if self.state.is_seeded():
            return False
        t0 = time.perf_counter()
        self.engine.run_to_exhaustion(self.max_steps)
        self._elapsed = time.perf_counter() - t0
        self._refresh_path()
        return True

    # ----------------- internals -----------------
    def _replay(self) -> None:
        self.state.reset()
        self._path, self._path_cells = [], set()
        if self.mode is SearchMode.EAGER:
            self.tick()
        else:
            t0 = time.perf_counter()
            self.engine.run_steps(self.step_count)
            self._elapsed = time.perf_counter() - t0
            self._refresh_path()
        logger.debug("replayed %s search from %s: %d visited, exhausted=%s",
                     self.mode.value, self.origin, len(self.state.visited), self.is_exhausted)

    def _refresh_path(self) -> None:
        self._path = reconstruct_path(self.state.came_from, self.engine.target)
        self._path_cells = set(self._path)

    def _reject(self, op: str, arg) -> bool:
        logger.debug("ignored %s(%s)", op, arg)
        return False

    def __repr__(self) -> str:
        return (f"SearchSession({self.grid.width}x{self.grid.height}, mode={self.mode.value}, "
                f"origin={self.origin}, target={self.target}, step={self.step_count})")

def run_eager(grid: Grid, origin: Coord, target: Coord, early_exit: bool = True) -> SearchSession:
    """Build an eager session over a copy of `grid` and run it."""
    return SearchSession(SearchConfig(grid.width, grid.height, origin, target, set(grid.walls),
                                      mode=SearchMode.EAGER, early_exit=early_exit,
                                      cell_size=grid.cell_size))
