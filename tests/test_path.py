"""
Tests for path reconstruction.
"""

import pytest

from ebfs.engine import StepEngine
from ebfs.grid import Grid
from ebfs.heuristics import manhattan
from ebfs.path import reconstruct_path
from ebfs.state import SearchState


class TestReconstructPath:
    """Walking predecessors back from the target."""

    def test_chain(self):
        came_from = {(0, 0): None, (0, 1): (0, 0), (1, 1): (0, 1)}
        assert reconstruct_path(came_from, (1, 1)) == [(1, 1), (0, 1), (0, 0)]

    def test_target_is_origin(self):
        assert reconstruct_path({(2, 2): None}, (2, 2)) == [(2, 2)]

    def test_unreached_target_gives_empty_path(self):
        assert reconstruct_path({(0, 0): None}, (3, 3)) == []
        assert reconstruct_path({}, (0, 0)) == []

    @pytest.mark.parametrize("walls,origin,target", [
        (set(), (0, 0), (4, 4)),
        ({(1, 0), (1, 1), (1, 2), (1, 3)}, (0, 0), (2, 0)),
        ({(2, 1), (2, 2), (2, 3), (0, 2), (1, 2)}, (2, 4), (4, 0)),
    ])
    def test_path_is_a_shortest_route(self, walls, origin, target):
        grid = Grid(5, 5, walls)
        engine = StepEngine(grid, SearchState(), origin, target)
        engine.run_to_exhaustion()
        path = reconstruct_path(engine.state.came_from, target)

        assert path[0] == target
        assert path[-1] == origin
        assert len(set(path)) == len(path)
        for a, b in zip(path, path[1:]):
            assert manhattan(a, b) == 1
            assert not grid.is_wall(a)
        assert len(path) - 1 == engine.state.depth(target)
