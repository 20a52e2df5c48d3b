"""
Tests for the grid model.
"""

import pytest

from ebfs.grid import Grid


class TestGridGeometry:
    """Bounds and neighbor generation."""

    def test_in_bounds(self):
        grid = Grid(3, 2)
        assert grid.in_bounds((0, 0))
        assert grid.in_bounds((2, 1))
        assert not grid.in_bounds((3, 0))
        assert not grid.in_bounds((0, 2))
        assert not grid.in_bounds((-1, 0))

    def test_corner_neighbors_exclude_out_of_bounds(self):
        grid = Grid(3, 3)
        assert grid.neighbors((0, 0)) == [(0, 1), (1, 0)]
        assert grid.neighbors((2, 2)) == [(2, 1), (1, 2)]

    def test_interior_neighbors_order(self):
        """Up, left, down, right."""
        grid = Grid(3, 3)
        assert grid.neighbors((1, 1)) == [(1, 0), (0, 1), (1, 2), (2, 1)]

    def test_single_cell_grid_has_no_neighbors(self):
        assert Grid(1, 1).neighbors((0, 0)) == []

    @pytest.mark.parametrize("width,height", [(0, 3), (3, 0), (-1, 2)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(ValueError):
            Grid(width, height)


class TestWalls:
    """Wall edits report whether they changed anything."""

    def test_add_and_remove(self):
        grid = Grid(3, 3)
        assert grid.add_wall((1, 1)) is True
        assert grid.is_wall((1, 1))
        assert grid.add_wall((1, 1)) is False
        assert grid.remove_wall((1, 1)) is True
        assert not grid.is_wall((1, 1))
        assert grid.remove_wall((1, 1)) is False

    def test_out_of_bounds_wall_ignored(self):
        grid = Grid(3, 3)
        assert grid.add_wall((3, 3)) is False
        assert grid.walls == set()

    def test_initial_walls_outside_grid_dropped(self):
        grid = Grid(2, 2, {(0, 1), (5, 5)})
        assert grid.walls == {(0, 1)}

    def test_copy_is_independent(self):
        grid = Grid(3, 3, {(1, 1)})
        other = grid.copy()
        other.add_wall((0, 0))
        assert grid.walls == {(1, 1)}


class TestGridFiles:
    """Grid file loading and generation."""

    def test_load(self, tmp_path):
        path = tmp_path / "g.txt"
        path.write_text("GRID 3 2 0 0 2 1\n010\n\n001\n")
        grid, origin, target = Grid.load(str(path))
        assert (grid.width, grid.height) == (3, 2)
        assert origin == (0, 0)
        assert target == (2, 1)
        assert grid.walls == {(1, 0), (2, 1)}

    def test_save_then_load(self, tmp_path):
        grid = Grid(4, 3, {(0, 2), (3, 0)})
        path = tmp_path / "sub" / "g.txt"
        grid.save(str(path), (1, 1), (2, 2))
        loaded, origin, target = Grid.load(str(path))
        assert loaded.walls == grid.walls
        assert (origin, target) == ((1, 1), (2, 2))

    @pytest.mark.parametrize("content", [
        "",
        "3 3 0 0 2 2\n000\n000\n000\n",
        "GRID 3 3 0 0 2 2\n000\n000\n",
        "GRID 3 2 0 0 2 1\n000\n0x0\n",
        "GRID 3 2 0 0 2 1\n0000\n000\n",
        "GRID a 2 0 0 2 1\n000\n000\n",
    ])
    def test_malformed_files_rejected(self, tmp_path, content):
        path = tmp_path / "bad.txt"
        path.write_text(content)
        with pytest.raises(ValueError):
            Grid.load(str(path))

    def test_random_is_seeded_and_keeps_cells_open(self):
        a = Grid.random(10, 8, p_wall=0.5, seed=7, keep_open=[(0, 0), (9, 7)])
        b = Grid.random(10, 8, p_wall=0.5, seed=7, keep_open=[(0, 0), (9, 7)])
        assert a.walls == b.walls
        assert (0, 0) not in a.walls
        assert (9, 7) not in a.walls
        assert all(a.in_bounds(w) for w in a.walls)
