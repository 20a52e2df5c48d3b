"""
Tests for the pygame viewer, run without a display.
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from ebfs.pygame_viewer import Viewer
from ebfs.replay import SearchConfig, SearchMode, SearchSession

CELL = 10
SIZE = 5


def center(x, y):
    return (x * CELL + CELL // 2, (SIZE - 1 - y) * CELL + CELL // 2)


def press(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


def release(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=button)


def motion(pos, buttons=(1, 0, 0)):
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=buttons)


@pytest.fixture
def viewer():
    pygame.init()
    session = SearchSession(SearchConfig(width=SIZE, height=SIZE, cell_size=CELL, mode=SearchMode.STEPPED))
    yield Viewer(session)
    pygame.quit()


class TestMouse:
    """Mouse events reaching the session."""

    def test_left_click_adds_wall(self, viewer):
        viewer._on_mouse(press(center(4, 4)))
        assert viewer.session.grid.walls == {(4, 4)}

    @pytest.mark.parametrize("button", [2, 3, 4, 5])
    def test_other_buttons_and_wheel_ignored(self, viewer, button):
        viewer._on_mouse(press(center(4, 4), button))
        assert viewer.session.grid.walls == set()
        viewer.session.add_wall((3, 3))
        viewer._on_mouse(press(center(3, 3), button))
        assert viewer.session.grid.walls == {(3, 3)}

    def test_wheel_does_not_end_drag(self, viewer):
        viewer._on_mouse(press(center(4, 4)))
        viewer._on_mouse(release(center(4, 4), button=4))
        viewer._on_mouse(motion(center(4, 3)))
        assert viewer.session.grid.walls == {(4, 4), (4, 3)}

    def test_motion_without_left_button_ignored(self, viewer):
        viewer._on_mouse(press(center(4, 4)))
        viewer._on_mouse(motion(center(4, 3), buttons=(0, 0, 1)))
        viewer._on_mouse(release(center(4, 3)))
        viewer._on_mouse(motion(center(4, 2)))
        assert viewer.session.grid.walls == {(4, 4)}


class TestSlider:
    """Knob drawing and click mapping agree."""

    def test_grabbing_knob_keeps_step(self, viewer):
        viewer.session.set_step_count(7)
        knob_center = viewer._knob_x() + CELL // 2
        assert viewer._slider_value(knob_center) == 7

    def test_slider_ends(self, viewer):
        width = viewer.screen.get_width()
        assert viewer._slider_value(0) == 0
        assert viewer._slider_value(width) == viewer.session.max_steps

    def test_drag_on_slider_moves_cursor(self, viewer):
        y = viewer.board_h + CELL // 2
        viewer._on_mouse(press((viewer.screen.get_width() - 1, y)))
        assert viewer.session.step_count == viewer.session.max_steps
        viewer._on_mouse(motion((0, y)))
        assert viewer.session.step_count == 0
        assert viewer.session.grid.walls == set()
