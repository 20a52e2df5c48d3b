# ebfs/pygame_viewer.py (two panels: full search | early exit)
from __future__ import annotations
import argparse
import logging
import os
import pygame

from .types import Coord
from .replay import SearchMode, SearchSession
from .cli import add_viewer_args, build_session
from .input import (NO_DRAG, Drag, DragMode, Panel, apply_drag, classify_press,
                    left_button, left_held, panel_offset)
from .viz import Colors, blend, heat_alpha

logger = logging.getLogger(__name__)

class Viewer:
    def __init__(self, session: SearchSession, fps: int = 60, speed: float = 10.0):
        self.session = session
        self.cell = session.grid.cell_size
        self.fps = fps
        self.speed_steps_per_sec = speed
        self.autoplay = False
        self._step_timer = 0.0
        self.show_grid = True
        self.drag: Drag = NO_DRAG
        self.slider_held = False

        w, h = session.grid.width, session.grid.height
        self.board_h = h * self.cell
        bar = self.cell if session.mode is SearchMode.STEPPED else 0
        self.screen = pygame.display.set_mode(((2 * w + 1) * self.cell, self.board_h + bar))
        pygame.display.set_caption(f"Early Exit BFS ({session.mode.value})")
        self.clock = pygame.time.Clock()

    # ----------------- geometry -----------------
    def _rect(self, s: Coord, panel: Panel, inset: int = 0) -> pygame.Rect:
        x, y = s
        h = self.session.grid.height
        left = (x + panel_offset(panel, self.session.grid.width)) * self.cell
        top = (h - 1 - y) * self.cell
        return pygame.Rect(left + inset, top + inset, self.cell - 2 * inset, self.cell - 2 * inset)

    def _slider_span(self) -> int:
        # the knob is one cell wide, its left edge travels over this many pixels
        return max(self.screen.get_width() - self.cell, 1)

    def _slider_value(self, px: int) -> int:
        frac = min(max((px - self.cell // 2) / self._slider_span(), 0.0), 1.0)
        return round(frac * self.session.max_steps)

    def _knob_x(self) -> int:
        ses = self.session
        frac = ses.step_count / ses.max_steps if ses.max_steps else 0.0
        return round(frac * self._slider_span())

    # ----------------- draw -----------------
    def _draw_panel(self, panel: Panel) -> None:
        ses, scr = self.session, self.screen
        w, h = ses.grid.width, ses.grid.height
        visited = ses.state.visited if panel is Panel.FULL else ses.state.early_exit_visited

        for s in ses.grid.cells():
            scr.fill(Colors.UNVISITED, self._rect(s, panel))
        for s in visited:
            scr.fill(blend(Colors.UNVISITED, Colors.HEAT, heat_alpha(ses.origin, s, w, h)), self._rect(s, panel))
        if ses.mode is SearchMode.STEPPED and panel is Panel.FULL:
            for s in ses.frontier:
                scr.fill(Colors.FRONTIER, self._rect(s, panel))
        for s in ses.grid.walls:
            scr.fill(Colors.WALL, self._rect(s, panel))
        for s in ses.path:
            scr.fill(Colors.PATH, self._rect(s, panel))

        pygame.draw.rect(scr, Colors.TARGET, self._rect(ses.target, panel, 4), border_radius=6)
        pygame.draw.rect(scr, Colors.ORIGIN, self._rect(ses.origin, panel, 6), border_radius=8)

        if self.show_grid:
            x0 = panel_offset(panel, w) * self.cell
            for i in range(w + 1):
                pygame.draw.line(scr, Colors.GRID, (x0 + i * self.cell, 0), (x0 + i * self.cell, self.board_h))
            for j in range(h + 1):
                pygame.draw.line(scr, Colors.GRID, (x0, j * self.cell), (x0 + w * self.cell, j * self.cell))

    def _draw_slider(self) -> None:
        scr = self.screen
        W = scr.get_width()
        bar = pygame.Rect(0, self.board_h, W, self.cell)
        scr.fill((190, 190, 190), bar)
        pygame.draw.rect(scr, (0, 0, 0), pygame.Rect(self._knob_x(), self.board_h, self.cell, self.cell), border_radius=6)

    def draw(self) -> None:
        self.screen.fill((0, 0, 0))
        for panel in Panel:
            self._draw_panel(panel)
        if self.session.mode is SearchMode.STEPPED:
            self._draw_slider()
        pygame.display.flip()

    # ----------------- input -----------------
    def _on_key(self, key: int) -> bool:
        ses = self.session
        if key == pygame.K_ESCAPE:
            return False
        if key == pygame.K_r:
            ses.restart()
        elif key == pygame.K_h:
            self.show_grid = not self.show_grid
        elif key == pygame.K_SPACE:
            self.autoplay = not self.autoplay
        elif key == pygame.K_RIGHT:
            ses.advance_step()
        elif key == pygame.K_LEFT:
            ses.retreat_step()
        elif key == pygame.K_PAGEUP:
            self.speed_steps_per_sec = min(self.speed_steps_per_sec + 5, 240)
        elif key == pygame.K_PAGEDOWN:
            self.speed_steps_per_sec = max(self.speed_steps_per_sec - 5, 1)
        return True

    def _on_mouse(self, event) -> None:
        if event.type == pygame.MOUSEMOTION:
            if not left_held(event.buttons):
                return
        elif not left_button(event.button):
            return
        if event.type == pygame.MOUSEBUTTONUP:
            self.drag = NO_DRAG
            self.slider_held = False
            return
        if event.type == pygame.MOUSEBUTTONDOWN:
            if event.pos[1] >= self.board_h:
                self.slider_held = self.session.mode is SearchMode.STEPPED
            else:
                self.drag = classify_press(event.pos, self.session)
                logger.debug("drag %s on %s", self.drag.mode.value, self.drag.panel.name)
        if self.slider_held:
            self.session.set_step_count(self._slider_value(event.pos[0]))
        elif self.drag.mode is not DragMode.NONE:
            apply_drag(self.drag, event.pos, self.session)

    # ----------------- loop -----------------
    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(self.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._on_key(event.key)
                elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEMOTION, pygame.MOUSEBUTTONUP):
                    self._on_mouse(event)

            if self.session.mode is SearchMode.EAGER:
                self.session.tick()
            elif self.autoplay:
                self._step_timer += dt
                interval = 1.0 / self.speed_steps_per_sec
                while self._step_timer >= interval:
                    self._step_timer -= interval
                    if not self.session.advance_step():
                        self.autoplay = False
                        break

            self.draw()

def run_viewer(args: argparse.Namespace) -> None:
    session = build_session(args)
    pygame.init()
    try:
        Viewer(session, fps=args.fps, speed=args.speed).run()
    finally:
        pygame.quit()

def main():
    parser = argparse.ArgumentParser(description="Early-exit breadth-first search viewer")
    add_viewer_args(parser)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s: %(message)s")
    if args.load and not os.path.isfile(args.load):
        parser.error(f"no such grid file: {args.load}")
    run_viewer(args)

if __name__ == "__main__":
    main()
