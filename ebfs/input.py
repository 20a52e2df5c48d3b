# ebfs/input.py
"""
Mouse gestures to session edits.

A press picks a drag mode (move origin, move target, remove walls or add
walls) on one of the two panels; the mode is held until the button is
released, so a drag keeps editing the same thing after the cursor leaves it.
Points are screen pixels with y growing downwards; grid y grows upwards.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from .types import Coord
from .replay import SearchSession

Point = Tuple[int, int]

LEFT_BUTTON = 1  # wheel ticks arrive as buttons 4 and 5

class Panel(Enum):
    FULL = 0
    EARLY_EXIT = 1

class DragMode(Enum):
    NONE = "none"
    ORIGIN = "origin"
    TARGET = "target"
    REMOVE_WALL = "remove_wall"
    ADD_WALL = "add_wall"

@dataclass(frozen=True)
class Drag:
    mode: DragMode = DragMode.NONE
    panel: Panel = Panel.FULL

NO_DRAG = Drag()

def left_button(button: int) -> bool:
    return button == LEFT_BUTTON

def left_held(buttons: Sequence[int]) -> bool:
    """`buttons` is the pressed-state tuple of a motion event, left first."""
    return bool(buttons) and bool(buttons[0])

def panel_offset(panel: Panel, width: int) -> int:
    return 0 if panel is Panel.FULL else width + 1

def raw_cell(point: Point, session: SearchSession, panel: Panel) -> Coord:
    """Grid cell under `point` relative to `panel`, possibly out of bounds."""
    cell = session.grid.cell_size
    px, py = point
    x = px // cell - panel_offset(panel, session.grid.width)
    y = session.grid.height - 1 - py // cell
    return (x, y)

def cell_at(point: Point, session: SearchSession, panel: Panel) -> Coord:
    """Grid cell closest to `point`, clamped to the grid."""
    x, y = raw_cell(point, session, panel)
    x = min(max(x, 0), session.grid.width - 1)
    y = min(max(y, 0), session.grid.height - 1)
    return (x, y)

def inside_grid(point: Point, session: SearchSession, panel: Panel) -> bool:
    return session.grid.in_bounds(raw_cell(point, session, panel))

def classify_press(point: Point, session: SearchSession) -> Drag:
    for mode, cell in ((DragMode.ORIGIN, session.origin), (DragMode.TARGET, session.target)):
        for panel in Panel:
            if inside_grid(point, session, panel) and raw_cell(point, session, panel) == cell:
                return Drag(mode, panel)
    for panel in Panel:
        if inside_grid(point, session, panel) and session.is_wall(raw_cell(point, session, panel)):
            return Drag(DragMode.REMOVE_WALL, panel)
    for panel in Panel:
        if inside_grid(point, session, panel):
            return Drag(DragMode.ADD_WALL, panel)
    return NO_DRAG

def apply_drag(drag: Drag, point: Point, session: SearchSession) -> bool:
    """Apply the edit for the held drag at `point`. Returns True if the session changed."""
    if drag.mode is DragMode.ORIGIN:
        return session.set_origin(cell_at(point, session, drag.panel))
    if drag.mode is DragMode.TARGET:
        return session.set_target(cell_at(point, session, drag.panel))
    if drag.mode in (DragMode.ADD_WALL, DragMode.REMOVE_WALL):
        if not inside_grid(point, session, drag.panel):
            return False
        cell = raw_cell(point, session, drag.panel)
        if drag.mode is DragMode.ADD_WALL:
            return session.add_wall(cell)
        return session.remove_wall(cell)
    return False
