# ebfs/types.py
from typing import Tuple

Coord = Tuple[int, int]  # (x, y)
