# ebfs/path.py
from __future__ import annotations
from typing import Dict, List, Optional
from .types import Coord

def reconstruct_path(came_from: Dict[Coord, Optional[Coord]], target: Coord) -> List[Coord]:
    """
    Walk predecessors from `target` back to the origin.
    The result starts at the target and ends at the origin; it is empty
    when the target was never discovered.
    """
    path: List[Coord] = []
    cur: Optional[Coord] = target
    while cur is not None and cur in came_from:
        path.append(cur)
        cur = came_from[cur]
    return path
