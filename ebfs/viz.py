# ebfs/viz.py
from __future__ import annotations
from dataclasses import dataclass
import os
from typing import Iterable, Tuple
from PIL import Image, ImageDraw

from .types import Coord
from .heuristics import manhattan
from .replay import SearchSession

RGB = Tuple[int, int, int]

@dataclass
class Colors:
    UNVISITED = (221, 212, 213)  # light brown
    VISITED = (204, 191, 179)    # dark brown
    FRONTIER = (103, 136, 204)   # blue
    WALL = (134, 134, 120)       # camo green
    PATH = (231, 230, 228)       # pastel white
    GRID = (255, 255, 255)
    HEAT = (255, 0, 0)
    ORIGIN = (220, 90, 90)
    TARGET = (90, 160, 220)

def heat_alpha(origin: Coord, cell: Coord, width: int, height: int) -> int:
    """Heat-map opacity: Manhattan distance from the origin scaled to 0..255."""
    return 255 * manhattan(origin, cell) // (width + height)

def blend(base: RGB, over: RGB, alpha: int) -> RGB:
    a = alpha / 255.0
    return tuple(round(b * (1 - a) + o * a) for b, o in zip(base, over))

def _fill(drw: ImageDraw.ImageDraw, cells: Iterable[Coord], color: RGB, cell: int, x_off: int, h: int) -> None:
    for (x, y) in cells:
        # y grows upwards on the grid, downwards in the image
        x0, y0 = (x + x_off) * cell, (h - 1 - y) * cell
        drw.rectangle((x0, y0, x0 + cell - 1, y0 + cell - 1), fill=color)

def draw_search_png(session: SearchSession, out_png: str, cell: int = 0) -> None:
    """
    Two panels side by side, one empty column apart: the full search heat map
    on the left and the early-exit heat map on the right. Walls, path, origin
    and target are drawn on both.
    """
    cell = cell or session.grid.cell_size
    w, h = session.grid.width, session.grid.height
    origin, target = session.origin, session.target
    img = Image.new("RGB", ((2 * w + 1) * cell, h * cell), (0, 0, 0))
    drw = ImageDraw.Draw(img)

    panels = ((0, session.state.visited), (w + 1, session.state.early_exit_visited))
    for x_off, visited in panels:
        _fill(drw, session.grid.cells(), Colors.UNVISITED, cell, x_off, h)
        for c in visited:
            color = blend(Colors.UNVISITED, Colors.HEAT, heat_alpha(origin, c, w, h))
            _fill(drw, [c], color, cell, x_off, h)
        _fill(drw, session.grid.walls, Colors.WALL, cell, x_off, h)
        _fill(drw, session.path, Colors.PATH, cell, x_off, h)
        _fill(drw, [target], Colors.TARGET, cell, x_off, h)
        _fill(drw, [origin], Colors.ORIGIN, cell, x_off, h)

        for i in range(w + 1):
            x = (i + x_off) * cell
            drw.line((x, 0, x, h * cell), fill=Colors.GRID)
        for j in range(h + 1):
            drw.line((x_off * cell, j * cell, (x_off + w) * cell, j * cell), fill=Colors.GRID)

    os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)
    img.save(out_png)
