# ebfs/__init__.py
from .types import Coord
from .grid import Grid
from .heuristics import chebyshev, manhattan
from .state import SearchState
from .engine import StepEngine, EngineStatus
from .path import reconstruct_path
from .replay import SearchConfig, SearchMode, SearchSession, RunStats, run_eager

__all__ = [
    "Coord", "Grid", "chebyshev", "manhattan",
    "SearchState", "StepEngine", "EngineStatus", "reconstruct_path",
    "SearchConfig", "SearchMode", "SearchSession", "RunStats", "run_eager",
]
