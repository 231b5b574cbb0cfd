"""Tests for the Grid module."""

import numpy as np
import pytest

from grid_snake.grid import Grid


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 17
        assert grid.height == 17
        assert grid.tile_size == (20.0, 20.0)
        assert grid.half_width == 8
        assert grid.half_height == 8

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 3"):
            Grid(width=1, height=5)

    def test_even_dimensions_rejected(self):
        with pytest.raises(ValueError, match="odd"):
            Grid(width=16, height=17)
        with pytest.raises(ValueError, match="odd"):
            Grid(width=17, height=4)

    def test_tile_size_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            Grid(tile_size=(0.0, 20.0))


class TestGridGeometry:
    def test_center_and_cell_count(self):
        grid = Grid(width=5, height=7)
        assert grid.center == (0.0, 0.0)
        assert grid.cell_count == 35

    def test_snap_rounds_to_nearest_tile(self):
        grid = Grid()
        assert grid.snap((19.0, -31.0)) == (20.0, -40.0)
        assert grid.snap((40.000001, 59.99999)) == (40.0, 60.0)

    def test_snap_rounds_halfway_away_from_zero(self):
        grid = Grid()
        assert grid.snap((10.0, -10.0)) == (20.0, -20.0)
        assert grid.snap((30.0, -30.0)) == (40.0, -40.0)

    def test_is_aligned(self):
        grid = Grid()
        assert grid.is_aligned((20.0, -40.0))
        assert not grid.is_aligned((21.0, 40.0))

    def test_cell_world_conversion(self):
        grid = Grid()
        assert grid.to_cell((40.0, -60.0)) == (2, -3)
        assert grid.to_world(2, -3) == (40.0, -60.0)

    def test_in_bounds(self):
        grid = Grid()
        assert grid.in_bounds((0.0, 0.0))
        assert grid.in_bounds((160.0, -160.0))
        assert not grid.in_bounds((180.0, 0.0))
        assert not grid.in_bounds((0.0, -180.0))

    def test_wall_offset(self):
        assert Grid().wall_offset == (180.0, 180.0)
        assert Grid(width=3, height=5, tile_size=(10.0, 10.0)).wall_offset == (20.0, 30.0)


class TestGridSampling:
    def test_random_positions_aligned_and_in_bounds(self):
        grid = Grid(width=5, height=5)
        rng = np.random.default_rng(0)
        seen = set()
        for _ in range(500):
            pos = grid.random_position(rng)
            assert grid.is_aligned(pos)
            assert grid.in_bounds(pos)
            seen.add(pos)
        # Every tile, edges included, is reachable.
        assert len(seen) == 25

    def test_free_cells_excludes_occupied(self):
        grid = Grid(width=3, height=3)
        free = grid.free_cells([(0.0, 0.0), (20.0, 20.0)])
        assert len(free) == 7
        assert (0.0, 0.0) not in free
        assert (20.0, 20.0) not in free
        assert (-20.0, -20.0) in free

    def test_free_cells_ignores_off_grid_positions(self):
        grid = Grid(width=3, height=3)
        assert len(grid.free_cells([(400.0, 0.0)])) == 9


class TestGridSerialization:
    def test_to_dict(self):
        d = Grid(width=5, height=7).to_dict()
        assert d == {"width": 5, "height": 7, "tile_size": [20.0, 20.0]}
